"""
Tool argument schemas

One pydantic model per tool. ``validate_arguments`` turns the raw argument
mapping from a tool call into a model instance with defaults applied, or
raises ``ValidationError`` naming the first offending field.
"""

from collections.abc import Mapping
from typing import Any, Dict, Literal, Optional, Type

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from .errors import UnknownToolError, ValidationError

WaitUntil = Literal["load", "domcontentloaded", "networkidle0", "networkidle2"]
ImageFormat = Literal["png", "jpeg", "webp"]

DEFAULT_VIEWPORT_WIDTH = 1280
DEFAULT_VIEWPORT_HEIGHT = 720

_url_adapter = TypeAdapter(AnyUrl)


class ToolArguments(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Viewport(ToolArguments):
    width: float = Field(default=DEFAULT_VIEWPORT_WIDTH, gt=0)
    height: float = Field(default=DEFAULT_VIEWPORT_HEIGHT, gt=0)

    def as_size(self) -> Dict[str, int]:
        return {"width": int(self.width), "height": int(self.height)}


class LaunchArguments(ToolArguments):
    headless: bool = True
    viewport: Optional[Viewport] = None


class NavigateArguments(ToolArguments):
    url: str
    wait_until: WaitUntil = Field(default="load", alias="waitUntil")

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        # Parsed only to reject malformed input; the caller's string is kept.
        try:
            _url_adapter.validate_python(value)
        except PydanticValidationError:
            raise PydanticCustomError("url_syntax", "Must be a valid URL")
        return value


class ScreenshotArguments(ToolArguments):
    full_page: bool = Field(default=False, alias="fullPage")
    format: ImageFormat = "png"
    quality: Optional[float] = Field(default=None, ge=0, le=100)


class GetTextArguments(ToolArguments):
    selector: Optional[str] = None


class ClickArguments(ToolArguments):
    selector: str


class TypeArguments(ToolArguments):
    selector: str
    text: str


class EvaluateArguments(ToolArguments):
    script: str


class CloseArguments(ToolArguments):
    pass


ARGUMENT_MODELS: Dict[str, Type[ToolArguments]] = {
    "launch": LaunchArguments,
    "navigate": NavigateArguments,
    "screenshot": ScreenshotArguments,
    "get_text": GetTextArguments,
    "click": ClickArguments,
    "type": TypeArguments,
    "evaluate": EvaluateArguments,
    "close": CloseArguments,
}


def validate_arguments(tool_name: str, arguments: Any) -> ToolArguments:
    """Validate and normalize the raw arguments of a tool call."""
    model = ARGUMENT_MODELS.get(tool_name)
    if model is None:
        raise UnknownToolError(tool_name)

    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ValidationError("Invalid arguments: expected an object")

    try:
        return model.model_validate(dict(arguments))
    except PydanticValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        if not field:
            raise ValidationError(f"Invalid arguments: {error['msg']}") from exc
        raise ValidationError(
            f"Invalid argument '{field}': {error['msg']}", field=field
        ) from exc
