"""User identity model."""

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """Who is at the terminal, and whether the next input renames them."""

    username: str | None = Field(
        default=None,
        description="Display name, unset until the first input is accepted",
    )
    editing_name: bool = Field(
        default=False,
        description="When set, the next input line replaces the username",
    )

    @property
    def is_known(self) -> bool:
        return bool(self.username)
