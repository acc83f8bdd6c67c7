"""Defaults and environment tables for the remote config client."""
from src.layered_config.utils.config.env import EnvPropertyMapping


# Location of the client options inside a configuration document
CLIENT_OPTIONS_PATH = ("spring", "cloud", "config")

DEFAULT_CLIENT_OPTIONS = {
    "enabled": False,
    "profiles": [],
    "fail-fast": False,
    "retry": {
        "enabled": False,
    },
    "endpoint": "http://localhost:8888",
    "label": "master",
    "rejectUnauthorized": True,
}

BOOTSTRAP_FILE_ENV = "SPRING_CONFIG_BOOTSTRAP_FILE"

REMOTE_ENV_PROPERTIES = (
    EnvPropertyMapping("SPRING_CONFIG_ENDPOINT", "spring.cloud.config.endpoint"),
    EnvPropertyMapping("SPRING_CONFIG_AUTH_USER", "spring.cloud.config.auth.user"),
    EnvPropertyMapping("SPRING_CONFIG_AUTH_PASS", "spring.cloud.config.auth.pass"),
)


def wrap_client_options(options: dict) -> dict:
    """Place client options at their document path."""
    document = options
    for segment in reversed(CLIENT_OPTIONS_PATH):
        document = {segment: document}
    return document
