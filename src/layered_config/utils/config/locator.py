"""Config file locator for application, profile and bootstrap files."""
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from src.layered_config.exceptions import ConfigNotFoundError


logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".yml", ".yaml")

APPLICATION_BASENAME = "application"
BOOTSTRAP_BASENAME = "bootstrap"


class ConfigLocator:
    """Locates configuration files inside a config directory.

    File names:
    1. Base application config: {config_dir}/application.<ext>
    2. Profile config: {config_dir}/application-{profile}.<ext>
    3. Bootstrap config: {config_dir}/bootstrap.<ext>

    Extensions are tried in order and the first existing file wins.
    """

    def __init__(
        self,
        config_dir: Union[str, Path],
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ):
        """Initialize config locator.

        Args:
            config_dir: Path to config directory
            extensions: File extensions to try, in order
        """
        self.config_dir = Path(config_dir)
        self.extensions = tuple(extensions)

    def candidates(self, basename: str) -> List[Path]:
        """All paths tried for ``basename``, in search order."""
        return [self.config_dir / f"{basename}{ext}" for ext in self.extensions]

    def find(self, basename: str) -> Optional[Path]:
        """Find the first existing file for ``basename``.

        Returns:
            Path to the file, or None when no candidate exists
        """
        for path in self.candidates(basename):
            if path.is_file():
                logger.debug(f"Found config at {path}", extra={"path": str(path)})
                return path
        return None

    def application_file(self) -> Path:
        """Find the base application file.

        Raises:
            ConfigNotFoundError: If no application file exists
        """
        path = self.find(APPLICATION_BASENAME)
        if path is None:
            searched = [str(p) for p in self.candidates(APPLICATION_BASENAME)]
            logger.error(
                f"Application config not found in {self.config_dir}",
                extra={"config_dir": str(self.config_dir), "searched_paths": searched},
            )
            raise ConfigNotFoundError(
                message="Application config file not found",
                config_file=searched[0],
                searched_paths=searched,
            )
        return path

    def profile_file(self, profile: str) -> Optional[Path]:
        """Find the profile-specific application file, if present."""
        return self.find(f"{APPLICATION_BASENAME}-{profile}")

    def bootstrap_file(self) -> Optional[Path]:
        """Find the bootstrap file, if present."""
        return self.find(BOOTSTRAP_BASENAME)
