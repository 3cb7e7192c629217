"""
Groq Whisper implementation of SpeechToTextProvider.
"""
from pathlib import Path

import groq
from groq import AsyncGroq
from loguru import logger

from carousel.core.providers.speech_provider import (
    SpeechResult,
    SpeechToTextConnectionError,
    SpeechToTextError,
    SpeechToTextProvider,
)


class GroqSpeechToText(SpeechToTextProvider):
    """
    Hosted Whisper transcription on Groq.

    The language is left unset so Whisper detects it. Client-side retries
    are disabled: a job the service rejects is a hard failure.

    Example:
        provider = GroqSpeechToText(api_key="...", model_name="whisper-large-v3")
        result = await provider.transcribe(Path("/tmp/audio.mp3"))
    """

    def __init__(self, api_key: str, model_name: str = "whisper-large-v3"):
        """
        Initialize the Groq speech-to-text provider.

        Args:
            api_key: Groq API key.
            model_name: Whisper model to use.
        """
        self.client = AsyncGroq(api_key=api_key, max_retries=0)
        self.model_name = model_name

    async def transcribe(self, audio_path: Path) -> SpeechResult:
        logger.info(f"Uploading and transcribing {audio_path.name} with Groq ({self.model_name})...")
        try:
            response = await self.client.audio.transcriptions.create(
                file=(audio_path.name, audio_path.read_bytes()),
                model=self.model_name,
                response_format="verbose_json",
            )
        except groq.APIStatusError as e:
            raise SpeechToTextError(f"Groq transcription failed: {e.status_code} {e.message}") from e
        except groq.APIConnectionError as e:
            raise SpeechToTextConnectionError(f"Groq unreachable: {e}") from e

        payload = response.model_dump()
        payload["segments"] = payload.get("segments") or []
        result = SpeechResult.model_validate(payload)
        logger.debug(
            f"Groq transcription completed ({len(result.text)} chars, language {result.language})"
        )
        return result
