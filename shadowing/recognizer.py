"""
Speech Recognizer — Turns a recorded attempt into text.

WhisperRecognizer uses Faster-Whisper (CTranslate2, INT8 on CPU).
The model is loaded on first use. Microphone capture itself happens
outside this package; recognizers receive a finished audio file.
"""

import importlib.util
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

import numpy as np
import soundfile as sf

logger = logging.getLogger(__name__)

SAMPLE_RATE = 16000


class SpeechRecognizer(ABC):
    """Speech-to-text capability."""

    @abstractmethod
    def is_supported(self) -> bool:
        """Whether recording should be offered at all."""

    @abstractmethod
    def transcribe(self, audio_path: Path) -> str:
        """Final transcript for a recording ("" if nothing was heard)."""


class WhisperRecognizer(SpeechRecognizer):
    """
    Speech recognition with Faster-Whisper.

    Short shadowing clips are transcribed in one pass with no VAD and
    no conditioning on previous text.
    """

    def __init__(self, config):
        self.model_size = getattr(config, "model", "base.en")
        self.compute_type = getattr(config, "compute_type", "int8")
        self.beam_size = getattr(config, "beam_size", 3)
        self.language = getattr(config, "language", "en")

        raw_threads = getattr(config, "threads", 0)
        if raw_threads <= 0:
            self.cpu_threads = os.cpu_count() or 4
        else:
            self.cpu_threads = raw_threads

        # Lazy-loaded
        self._model = None

    def is_supported(self) -> bool:
        return importlib.util.find_spec("faster_whisper") is not None

    def _load_model(self):
        """Load the Faster-Whisper model on first use."""
        if self._model is not None:
            return

        from faster_whisper import WhisperModel

        logger.info(
            f"Loading Faster-Whisper model '{self.model_size}' "
            f"(compute_type={self.compute_type}, threads={self.cpu_threads})"
        )
        self._model = WhisperModel(
            self.model_size,
            device="cpu",
            compute_type=self.compute_type,
            cpu_threads=self.cpu_threads
        )
        logger.info("Faster-Whisper model loaded successfully.")

    def _load_audio(self, audio_path: Path):
        """16 kHz mono float32 samples, or the path itself for resampling."""
        data, sample_rate = sf.read(str(audio_path), dtype="float32")
        if data.ndim > 1:
            data = data.mean(axis=1)
        if sample_rate != SAMPLE_RATE:
            logger.debug(f"{audio_path} is {sample_rate} Hz, letting Whisper resample")
            return str(audio_path)
        return np.ascontiguousarray(data, dtype=np.float32)

    def transcribe(self, audio_path: Path) -> str:
        audio_path = Path(audio_path)
        if not audio_path.exists():
            raise FileNotFoundError(f"Recording not found: {audio_path}")

        self._load_model()

        try:
            audio = self._load_audio(audio_path)
            segments, info = self._model.transcribe(
                audio,
                beam_size=self.beam_size,
                language=self.language,
                vad_filter=False,
                condition_on_previous_text=False,
            )
            text = " ".join(seg.text.strip() for seg in segments).strip()
        except Exception as e:
            logger.error(f"ASR error for {audio_path.name}: {e}")
            return ""

        logger.info(f"Recognized ({info.language}): '{text[:60]}'")
        return text
