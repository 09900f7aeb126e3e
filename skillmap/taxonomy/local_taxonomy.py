from __future__ import annotations

import json
import logging
from pathlib import Path

from .models import Taxonomy

logger = logging.getLogger(__name__)


class TaxonomyError(RuntimeError):
    pass


class LocalTaxonomy:
    """Taxonomy and synonym table read from JSON files shipped with the package."""

    def __init__(
        self,
        taxonomy_path: str | Path | None = None,
        synonyms_path: str | Path | None = None,
    ) -> None:
        categories_file = Path(taxonomy_path) if taxonomy_path else Path(__file__).with_name("taxonomy.json")
        synonyms_file = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
        self.taxonomy = Taxonomy(
            categories=self._load_mapping(categories_file),
            synonyms=self._load_mapping(synonyms_file),
        )

        orphans = self.taxonomy.orphan_synonym_keys()
        if orphans:
            logger.warning("taxonomy_orphan_synonyms keys=%s", orphans)
        duplicates = self.taxonomy.duplicate_skills()
        if duplicates:
            logger.info("taxonomy_duplicate_skills skills=%s first_category_wins=true", duplicates)
        logger.info(
            "taxonomy_loaded categories=%s skills=%s synonyms=%s",
            len(self.taxonomy.categories),
            len(self.taxonomy),
            len(self.taxonomy.synonyms),
        )

    @staticmethod
    def _load_mapping(path: Path) -> dict[str, list[str]]:
        try:
            with path.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except OSError as exc:
            raise TaxonomyError(f"Failed to read taxonomy file '{path}': {exc}") from exc
        except json.JSONDecodeError as exc:
            raise TaxonomyError(f"Invalid JSON in taxonomy file '{path}': {exc}") from exc

        if not isinstance(raw, dict):
            raise TaxonomyError(f"Invalid taxonomy file '{path}': expected a top-level object.")

        mapping: dict[str, list[str]] = {}
        for key, values in raw.items():
            if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
                raise TaxonomyError(f"Invalid taxonomy file '{path}': '{key}' must map to a list of strings.")
            mapping[str(key)] = list(values)
        return mapping
