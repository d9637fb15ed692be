"""Objective (task) model."""

from pydantic import BaseModel, Field


class Task(BaseModel):
    """An objective in the task list.

    Ids are assigned at creation, grow with creation order and never change.
    """

    id: int = Field(..., description="Creation-ordered unique identifier")
    text: str = Field(..., min_length=1, description="Objective text")
    completed: bool = Field(default=False, description="Whether it is done")
