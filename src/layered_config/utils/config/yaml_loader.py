"""YAML file loader with profile filtering."""
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

import yaml

from src.layered_config.document import Document, ensure_document
from src.layered_config.exceptions import ConfigParseError
from src.layered_config.utils.config.merger import ConfigMerger
from src.layered_config.utils.config.profiles import should_include, strip_profile_directive
from src.layered_config.utils.config.properties import to_nested


logger = logging.getLogger(__name__)


class YAMLLoader:
    """Loads (multi-document) YAML files into Documents."""

    def __init__(self, merger: Optional[ConfigMerger] = None):
        self.merger = merger or ConfigMerger()

    def load_documents(self, path: Union[str, Path]) -> List[Document]:
        """Parse every ``---`` separated document in a YAML file.

        Empty documents are skipped.

        Args:
            path: Path to YAML file

        Returns:
            Parsed documents in file order

        Raises:
            ConfigParseError: If YAML syntax is invalid, the file cannot be
                read, or a document is not a mapping
        """
        path = Path(path)
        try:
            logger.debug(f"Loading YAML file: {path}", extra={"path": str(path)})

            with open(path, "r", encoding="utf-8") as f:
                raw_documents = list(yaml.safe_load_all(f))

        except yaml.YAMLError as e:
            logger.error(
                f"YAML parse error in {path}: {e}",
                extra={"path": str(path), "error": str(e)},
            )

            mark = getattr(e, "problem_mark", None)
            raise ConfigParseError(
                message=f"Failed to parse YAML file: {e}",
                config_file=str(path),
                line_number=mark.line + 1 if mark is not None else None,
                column_number=mark.column + 1 if mark is not None else None,
                original_error=e,
            )

        except OSError as e:
            logger.error(
                f"Failed to read file {path}: {e}",
                extra={"path": str(path), "error": str(e)},
            )
            raise ConfigParseError(
                message=f"Failed to read config file: {e}",
                config_file=str(path),
                original_error=e,
            )

        documents = [
            ensure_document(raw, source=str(path))
            for raw in raw_documents
            if raw is not None
        ]

        logger.debug(
            f"YAML file parsed: {path}",
            extra={"path": str(path), "documents": len(documents)},
        )
        return documents

    def load(
        self,
        path: Union[str, Path],
        active_profiles: Optional[Sequence[str]] = None,
    ) -> Document:
        """Load a YAML file as one profile-filtered, normalized Document.

        Sub-documents that do not apply to ``active_profiles`` are dropped,
        dotted keys of the rest are expanded, and they are merged in file
        order.

        Args:
            path: Path to YAML file
            active_profiles: Active profile names

        Returns:
            Merged Document
        """
        included = []
        for index, document in enumerate(self.load_documents(path)):
            if should_include(document, active_profiles):
                included.append(to_nested(strip_profile_directive(document)))
            else:
                logger.debug(
                    f"Skipping document {index} of {path} for profiles {list(active_profiles or [])}",
                    extra={"path": str(path), "document_index": index},
                )

        merged = self.merger.merge_multiple(*included)

        logger.info(
            f"YAML file loaded successfully: {path}",
            extra={"path": str(path), "documents_used": len(included), "keys": list(merged.keys())},
        )

        return merged
