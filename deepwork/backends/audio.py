"""Audio backend that plays alarm and ambience tracks with an external player.

Playback is delegated to a command-line player (ffplay by default) started
with subprocess.Popen, so the timer never waits on audio. When the alarm
track is missing or the player cannot be started, a short synthesized
square-wave chirp is written to disk and played instead.
"""

import logging
import math
import struct
import subprocess
import wave
from io import BytesIO
from pathlib import Path

from deepwork.backends.base import Alarm, Ambience, AmbiencePlayer
from deepwork.models.config import AudioConfig

logger = logging.getLogger(__name__)

FALLBACK_TONE_NAME = "fallback_beep.wav"
SAMPLE_RATE = 22050


def synthesize_beep(
    start_hz: float = 440.0,
    end_hz: float = 880.0,
    sweep_seconds: float = 0.1,
    duration: float = 0.5,
    sample_rate: int = SAMPLE_RATE,
) -> bytes:
    """Build a mono 16-bit WAV of a square wave with a rising pitch sweep.

    The pitch rises exponentially from start_hz to end_hz over sweep_seconds
    and then holds, while the amplitude decays exponentially to ~2%.

    Returns:
        WAV file contents.
    """
    total = int(sample_rate * duration)
    samples = []
    phase = 0.0
    for t in range(total):
        seconds = t / sample_rate
        ratio = min(seconds / sweep_seconds, 1.0)
        freq = start_hz * (end_hz / start_hz) ** ratio
        phase += freq / sample_rate
        square = 1.0 if math.sin(2 * math.pi * phase) >= 0 else -1.0
        amp = 12000 * (0.02 ** (seconds / duration))
        samples.append(int(amp * square))

    buf = BytesIO()
    with wave.open(buf, "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(sample_rate)
        w.writeframes(b"".join(struct.pack("<h", s) for s in samples))
    return buf.getvalue()


class PlayerBackend(Alarm, AmbiencePlayer):
    """Plays sounds through a command-line player.

    One instance serves both as the alarm and as the ambience player so
    they share the player command and sounds directory.
    """

    def __init__(self, config: AudioConfig | None = None, cache_dir: str | Path = "data"):
        """Initialize the backend.

        Args:
            config: Audio configuration. Defaults to AudioConfig().
            cache_dir: Where the synthesized fallback tone is written.
        """
        self.config = config or AudioConfig()
        self.sounds_dir = Path(self.config.sounds_dir)
        self.cache_dir = Path(cache_dir)
        self._ambience_process: subprocess.Popen | None = None
        self._playing = Ambience.NONE

    # ── Alarm ───────────────────────────────────────────────────────────────

    def play_alarm(self, volume: float) -> None:
        """Play the alarm track, or the synthesized chirp if that fails."""
        if not self.config.enabled:
            return

        alarm_path = self.sounds_dir / self.config.alarm_file
        if alarm_path.exists() and self._spawn(alarm_path, volume) is not None:
            return

        logger.info("Alarm track unavailable, using fallback beep")
        self._play_fallback(volume)

    def _play_fallback(self, volume: float) -> None:
        try:
            tone_path = self._fallback_tone_path()
        except OSError as e:
            logger.warning(f"Fallback audio failed: {e}")
            return
        if self._spawn(tone_path, volume) is None:
            logger.warning("Fallback audio failed: player could not be started")

    def _fallback_tone_path(self) -> Path:
        path = self.cache_dir / FALLBACK_TONE_NAME
        if not path.exists():
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(synthesize_beep())
        return path

    # ── Ambience ────────────────────────────────────────────────────────────

    @property
    def playing(self) -> Ambience:
        return self._playing

    def play(self, ambience: Ambience, volume: float) -> None:
        """Loop an ambience track until stop() is called."""
        self.stop()
        if ambience == Ambience.NONE or not self.config.enabled:
            return

        filename = self.config.ambience_files.get(ambience.value)
        if not filename:
            logger.warning(f"No track configured for ambience {ambience.value}")
            return

        path = self.sounds_dir / filename
        if not path.exists():
            logger.warning(f"Ambience track not found: {path}")
            return

        process = self._spawn(path, volume, loop=True)
        if process is not None:
            self._ambience_process = process
            self._playing = ambience

    def stop(self) -> None:
        """Stop the looping ambience track."""
        process = self._ambience_process
        self._ambience_process = None
        self._playing = Ambience.NONE
        if process is None:
            return
        try:
            process.terminate()
        except OSError as e:
            logger.warning(f"Failed to stop ambience: {e}")

    # ── Helpers ─────────────────────────────────────────────────────────────

    def build_command(self, path: Path, volume: float, loop: bool = False) -> list[str]:
        """Build the player command line for a track."""
        cmd = [
            self.config.player,
            "-nodisp",
            "-autoexit",
            "-loglevel",
            "quiet",
            "-volume",
            str(round(max(0.0, min(volume, 1.0)) * 100)),
        ]
        if loop:
            cmd.extend(["-loop", "0"])
        cmd.append(str(path))
        return cmd

    def _spawn(self, path: Path, volume: float, loop: bool = False) -> subprocess.Popen | None:
        """Start the player without waiting for it.

        Returns:
            The Popen handle, or None if the player could not be started.
        """
        try:
            return subprocess.Popen(
                self.build_command(path, volume, loop=loop),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except FileNotFoundError:
            logger.warning(f"Audio player '{self.config.player}' not found")
            return None
        except OSError as e:
            logger.warning(f"Audio playback failed: {e}")
            return None
