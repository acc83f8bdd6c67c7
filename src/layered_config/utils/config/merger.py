"""Config merger for combining multiple configuration documents."""
import copy
import logging
from typing import Any, Dict, Iterable

from src.layered_config.document import Document


logger = logging.getLogger(__name__)


class ConfigMerger:
    """Deep merges configuration documents.

    Merge rules:
    - Dicts on both sides: merged recursively
    - Anything else (scalars, lists, a dict replacing a scalar): the override
      value replaces the base value wholesale

    Example:
        base = {"sources": ["arxiv", "kaggle"], "db": {"host": "localhost"}}
        override = {"sources": ["web"], "db": {"port": 5432}}

        result = {"sources": ["web"], "db": {"host": "localhost", "port": 5432}}
    """

    def merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge override into base config.

        Args:
            base: Base configuration (lower priority)
            override: Override configuration (higher priority)

        Returns:
            Merged configuration (new dict, inputs not modified)
        """
        result = copy.deepcopy(base) if base else {}
        if not override:
            return result

        for key, override_value in override.items():
            existing = result.get(key)
            if isinstance(existing, dict) and isinstance(override_value, dict):
                result[key] = self.merge(existing, override_value)
            else:
                result[key] = copy.deepcopy(override_value)

        return result

    def merge_multiple(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge multiple configs in order (left to right, right wins).

        Args:
            *configs: Configs to merge, lowest priority first

        Returns:
            Final merged config
        """
        result: Dict[str, Any] = {}

        for config in configs:
            result = self.merge(result, config)

        logger.debug(
            "Configs merged",
            extra={"config_count": len(configs), "result_keys": len(result)},
        )

        return result


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Convenience function for deep merging two configs."""
    return ConfigMerger().merge(base, override)


def merge_documents(documents: Iterable[Document]) -> Document:
    """Fold an ordered sequence of documents into one, later documents winning."""
    return ConfigMerger().merge_multiple(*documents)
