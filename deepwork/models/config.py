"""Application configuration models with Pydantic validation."""

from pydantic import BaseModel, Field


class NotificationConfig(BaseModel):
    """Desktop notification configuration."""

    enabled: bool = Field(
        default=True,
        description="Whether phase-complete notifications are sent",
    )
    title: str = Field(
        default="Sudo Pomodoro",
        description="Notification title",
    )
    message: str = Field(
        default="Timer Complete! Time for next sequence.",
        description="Notification body",
    )
    sound: bool = Field(
        default=False,
        description="Let the notifier play its own sound (the alarm already does)",
    )


class AudioConfig(BaseModel):
    """Alarm and ambience playback configuration.

    Sounds are played by an external command-line player so playback never
    blocks the timer.
    """

    enabled: bool = Field(
        default=True,
        description="Whether any audio is played",
    )
    player: str = Field(
        default="ffplay",
        description="Command-line audio player executable",
    )
    sounds_dir: str = Field(
        default="sounds",
        description="Directory holding alarm and ambience tracks",
    )
    alarm_file: str = Field(
        default="alarm_retro.mp3",
        description="Alarm track, relative to sounds_dir",
    )
    ambience_files: dict[str, str] = Field(
        default_factory=lambda: {
            "DATACENTER": "ambience_datacenter.mp3",
            "RAIN": "ambience_rain.mp3",
            "KEYBOARD": "ambience_keyboard.mp3",
        },
        description="Ambience selection → track, relative to sounds_dir",
    )
    volume: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Initial playback volume",
    )


class AppConfig(BaseModel):
    """Root application configuration.

    Loaded from config.yaml and validated with Pydantic.
    """

    data_dir: str = Field(
        default="data",
        description="Directory for persisted settings, stats, username and tasks",
    )
    tick_interval: float = Field(
        default=1.0,
        gt=0.0,
        le=60.0,
        description="Seconds between timer ticks",
    )
    quotes_file: str | None = Field(
        default=None,
        description="Optional YAML list of motivational quotes",
    )
    notifications: NotificationConfig = Field(
        default_factory=NotificationConfig,
        description="Notification settings",
    )
    audio: AudioConfig = Field(
        default_factory=AudioConfig,
        description="Alarm and ambience settings",
    )
    port: int = Field(
        default=5060,
        ge=1024,
        le=65535,
        description="Port for the Flask server",
    )
    debug: bool = Field(
        default=False,
        description="Enable Flask debug mode",
    )
