"""Catalogue registry -- loads and serves language modules, enemy name pools,
boss definitions and companions.

The static tables live as JSON in the package ``data/`` directory and are
treated as immutable configuration once loaded.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from binary_boxer.ir.bosses import BossDefinition
from binary_boxer.ir.companions import CompanionDefinition, CompanionId
from binary_boxer.ir.languages import LanguageDefinition

logger = logging.getLogger(__name__)

# Default paths relative to the package.
_PACKAGE_ROOT = Path(__file__).resolve().parents[2]  # sim/content -> binary_boxer
_DATA_DIR = _PACKAGE_ROOT / "data"
_DEFAULT_LANGUAGES_PATH = _DATA_DIR / "languages.json"
_DEFAULT_ENEMIES_PATH = _DATA_DIR / "enemies.json"
_DEFAULT_BOSSES_PATH = _DATA_DIR / "bosses.json"
_DEFAULT_COMPANIONS_PATH = _DATA_DIR / "companions.json"


def _read_json(path: str | Path | None, default: Path) -> Any:
    path = Path(path) if path is not None else default
    with open(path) as f:
        return json.load(f)


class CatalogueRegistry:
    """Loads and serves every static table the engine consumes.

    Usage::

        registry = CatalogueRegistry()
        registry.load_all()

        rust = registry.get_language("rust")
        boss = registry.get_boss("THE_COMPILER")
    """

    def __init__(self) -> None:
        self.languages: dict[str, LanguageDefinition] = {}
        self.enemy_names: list[str] = []
        self.boss_names: list[str] = []
        self.bosses: dict[str, BossDefinition] = {}
        self.companions: dict[CompanionId, CompanionDefinition] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_all(self) -> CatalogueRegistry:
        """Load every bundled table.  Returns ``self`` for chaining."""
        self.load_languages()
        self.load_enemies()
        self.load_bosses()
        self.load_companions()
        return self

    def load_languages(self, path: str | Path | None = None) -> None:
        """Load language module definitions.

        Parameters
        ----------
        path:
            Path to the JSON file.  Defaults to ``data/languages.json``
            inside the package.
        """
        for raw in _read_json(path, _DEFAULT_LANGUAGES_PATH):
            lang = LanguageDefinition.model_validate(raw)
            self.languages[lang.id] = lang

    def load_enemies(self, path: str | Path | None = None) -> None:
        """Load the regular and boss enemy name pools."""
        raw = _read_json(path, _DEFAULT_ENEMIES_PATH)
        self.enemy_names = list(raw["regular"])
        self.boss_names = list(raw["boss"])
        if not self.enemy_names or not self.boss_names:
            raise ValueError("Enemy name pools must not be empty")

    def load_bosses(self, path: str | Path | None = None) -> None:
        """Load boss definitions (ability text, taunt, effect overlay)."""
        for raw in _read_json(path, _DEFAULT_BOSSES_PATH):
            boss = BossDefinition.model_validate(raw)
            self.bosses[boss.name] = boss

        for name in self.boss_names:
            if name not in self.bosses:
                logger.warning("Boss %r is in the name pool but has no definition", name)

    def load_companions(self, path: str | Path | None = None) -> None:
        for raw in _read_json(path, _DEFAULT_COMPANIONS_PATH):
            companion = CompanionDefinition.model_validate(raw)
            self.companions[companion.id] = companion

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_language(self, language_id: str) -> LanguageDefinition:
        """Return the language module for *language_id*.

        Raises
        ------
        KeyError
            If the id is not in the catalogue.
        """
        try:
            return self.languages[language_id]
        except KeyError:
            raise KeyError(f"Unknown language: {language_id!r}") from None

    def has_language(self, language_id: str) -> bool:
        return language_id in self.languages

    def list_language_ids(self) -> list[str]:
        """Return language ids in catalogue order."""
        return list(self.languages.keys())

    def get_boss(self, name: str) -> BossDefinition | None:
        """Return the :class:`BossDefinition` for *name*, or ``None``."""
        return self.bosses.get(name)

    def get_companion(self, companion_id: CompanionId | str) -> CompanionDefinition:
        return self.companions[CompanionId(companion_id)]

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"CatalogueRegistry(languages={len(self.languages)}, "
            f"enemies={len(self.enemy_names)}, "
            f"bosses={len(self.bosses)})"
        )
