"""Typed remote client options with validation."""
import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.layered_config.document import Document
from src.layered_config.exceptions import ConfigValidationError
from src.layered_config.remote.constants import CLIENT_OPTIONS_PATH, wrap_client_options
from src.layered_config.utils.retry import RetryState


logger = logging.getLogger(__name__)


class RetryOptions(BaseModel):
    """Retry settings for fail-fast remote fetches (intervals in ms)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    enabled: bool
    max_attempts: Optional[int] = Field(default=None, alias="max-attempts", gt=0)
    max_interval: Optional[int] = Field(default=None, alias="max-interval", gt=0)
    initial_interval: Optional[int] = Field(default=None, alias="initial-interval", gt=0)
    multiplier: Optional[float] = Field(default=None, gt=0)

    def new_state(self) -> RetryState:
        """Build a fresh retry state from these options."""
        return RetryState(
            max_attempts=self.max_attempts,
            max_interval=self.max_interval,
            initial_interval=self.initial_interval,
            multiplier=self.multiplier,
        )


class AuthOptions(BaseModel):
    """HTTP basic credentials; both fields are required together."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    user: str
    password: str = Field(alias="pass")


class RemoteClientOptions(BaseModel):
    """How and whether to contact the remote configuration service.

    Field aliases are the keys used in bootstrap files. Unknown keys are
    kept so they stay visible in the resolved options document.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    enabled: bool = False
    fail_fast: bool = Field(default=False, alias="fail-fast")
    name: Optional[str] = None
    endpoint: str = "http://localhost:8888"
    label: str = "master"
    profiles: List[str] = Field(default_factory=list)
    reject_unauthorized: bool = Field(default=True, alias="rejectUnauthorized")
    auth: Optional[AuthOptions] = None
    retry: Optional[RetryOptions] = None

    @field_validator("endpoint")
    @classmethod
    def _endpoint_is_http_uri(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("endpoint must be an absolute http(s) URI")
        return value

    @property
    def retry_enabled(self) -> bool:
        return self.retry is not None and self.retry.enabled

    def to_document(self) -> Document:
        """Render the options back into document form under their path."""
        return wrap_client_options(self.model_dump(by_alias=True, exclude_none=True))


def _extract_client_options(document: Mapping[str, Any]) -> Dict[str, Any]:
    current: Any = document
    walked = []
    for segment in CLIENT_OPTIONS_PATH:
        walked.append(segment)
        current = current.get(segment, {})
        if current is None:
            current = {}
        if not isinstance(current, Mapping):
            path = ".".join(walked)
            raise ConfigValidationError(
                message="Remote client options validation failed",
                field_errors={path: "must be a mapping"},
            )
    return dict(current)


def validate_remote_options(document: Mapping[str, Any], source: Optional[str] = None) -> RemoteClientOptions:
    """Validate the client options held in a merged bootstrap document.

    Args:
        document: Document containing ``spring.cloud.config``
        source: Label for error messages (e.g. bootstrap file path)

    Returns:
        Validated options

    Raises:
        ConfigValidationError: Listing every violated constraint by dotted path
    """
    raw_options = _extract_client_options(document)
    try:
        return RemoteClientOptions.model_validate(raw_options)
    except ValidationError as e:
        prefix = ".".join(CLIENT_OPTIONS_PATH)
        field_errors = {
            ".".join([prefix, *(str(part) for part in err["loc"])]): err["msg"]
            for err in e.errors()
        }
        logger.error(
            "Remote client options validation failed",
            extra={"config_file": source, "error_count": len(field_errors)},
        )
        raise ConfigValidationError(
            message="Remote client options validation failed",
            config_file=source,
            field_errors=field_errors,
            original_error=e,
        )
