# File: src/wall_layer_decomposer/wall_types/type_classifier.py
"""
Single-layer wall type classification and caching.

Each decomposed layer needs a wall type of exactly its thickness. Types
are identified by a WallTypeKey and named
`<prefix>-<function code>-<material code>-<N>mm`, e.g. `LYR-Stru-Conc-200mm`.
The classifier resolves a key in three steps:

1. The in-memory WallTypeCache (case-insensitive names)
2. An existing type in the model store with the same name
3. A new type cloned from a simple (basic) template type

The cache lives for a whole batch, so identical layers across walls
always share one type.

Usage:
    classifier = WallTypeClassifier(store)
    key, type_id = classifier.classify(layer)
"""

import logging
import math
import re
from typing import Dict, Optional, Tuple

from ..config.settings import DecompositionSettings, DEFAULT_SETTINGS
from ..errors import DuplicateTypeNameError, TypeCreationError
from ..wall_layers.layer_types import (
    FUNCTION_DISPLAY_NAMES,
    LayerFunction,
    LayerSpec,
    WallTypeKey,
)

logger = logging.getLogger(__name__)

DEFAULT_MATERIAL_CODE = "Def"

_NON_ALNUM = re.compile(r"[\W_]+", re.UNICODE)


def clean_name(text: Optional[str], max_length: int = 4) -> str:
    """Strip whitespace and punctuation from text and truncate it.

    Args:
        text: Raw material or function name.
        max_length: Number of characters kept.

    Returns:
        The cleaned code, or "Def" when nothing is left.

    Example:
        >>> clean_name("Concrete, Cast-in-Place")
        'Conc'
        >>> clean_name(" - ")
        'Def'
    """
    if not text:
        return DEFAULT_MATERIAL_CODE
    cleaned = _NON_ALNUM.sub("", text)
    if not cleaned:
        return DEFAULT_MATERIAL_CODE
    return cleaned[:max_length]


def round_thickness_mm(thickness: float) -> int:
    """Round a thickness to whole millimetres, halves rounding up."""
    return int(math.floor(thickness + 0.5))


def material_code(
    material: Optional[str], function: LayerFunction, max_length: int = 4
) -> str:
    """Material code of a layer.

    A layer without material is named after its function instead
    (e.g. "Insulation" -> "Insu").
    """
    material = (material or "").strip()
    if not material:
        material = FUNCTION_DISPLAY_NAMES[function]
    return clean_name(material, max_length)


def build_type_key(layer: LayerSpec, material_code_length: int = 4) -> WallTypeKey:
    """Build the WallTypeKey of a layer."""
    return WallTypeKey(
        function=layer.function,
        material_code=material_code(layer.material, layer.function, material_code_length),
        thickness_mm=round_thickness_mm(layer.thickness),
    )


class WallTypeCache:
    """Case-insensitive mapping of generated type names to type ids.

    Tracks lookup statistics so batch summaries can report how many
    types were created versus reused.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[str, str]] = {}
        self.hits = 0
        self.misses = 0
        self.created = 0

    @staticmethod
    def _normalize(name: str) -> str:
        return name.strip().lower()

    def get(self, name: str) -> Optional[str]:
        """Return the cached type id for name, counting the hit or miss."""
        entry = self._entries.get(self._normalize(name))
        if entry is None:
            self.misses += 1
            return None
        self.hits += 1
        return entry[1]

    def register(self, name: str, type_id: str, created: bool = False) -> None:
        self._entries[self._normalize(name)] = (name, type_id)
        if created:
            self.created += 1

    def forget(self, name: str) -> bool:
        """Drop name from the cache. Returns True if it was present."""
        return self._entries.pop(self._normalize(name), None) is not None

    def __contains__(self, name: str) -> bool:
        return self._normalize(name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = self.misses = self.created = 0


class WallTypeClassifier:
    """Resolves layers to single-layer wall types in a model store.

    Args:
        store: ModelStore used to find and create types.
        cache: Shared cache; a fresh one is created if omitted.
        settings: Naming prefix, template kind and material code length.
        logger: Logger receiving diagnostics.
    """

    def __init__(
        self,
        store,
        cache: Optional[WallTypeCache] = None,
        settings: Optional[DecompositionSettings] = None,
        logger: logging.Logger = logger,
    ) -> None:
        self.store = store
        self.cache = cache if cache is not None else WallTypeCache()
        self.settings = settings or DEFAULT_SETTINGS
        self.logger = logger

    def type_name(self, key: WallTypeKey) -> str:
        return key.type_name(self.settings.type_name_prefix)

    def classify(self, layer: LayerSpec) -> Tuple[WallTypeKey, str]:
        """Return the key and type id for a layer, creating the type if needed.

        Raises:
            TypeCreationError: If no template exists or creation fails
                and no type with the name can be found afterwards.
        """
        key = build_type_key(layer, self.settings.material_code_length)
        name = self.type_name(key)

        type_id = self.cache.get(name)
        if type_id is not None:
            self.logger.debug("Type %s found in cache", name)
            return key, type_id

        existing = self.store.find_type_by_name(name)
        if existing is not None:
            self.logger.debug("Reusing existing type %s (%s)", name, existing.type_id)
            self.cache.register(name, existing.type_id)
            return key, existing.type_id

        try:
            record = self.store.create_single_layer_type(
                self.settings.template_kind, name, layer
            )
        except DuplicateTypeNameError:
            record = self.store.find_type_by_name(name)
            if record is None:
                raise TypeCreationError(
                    f"Type {name} reported as duplicate but cannot be found",
                    extra={"type_name": name},
                )
            self.logger.debug("Type %s created concurrently, reusing it", name)
            self.cache.register(name, record.type_id)
            return key, record.type_id

        self.logger.info("Created wall type %s", name)
        self.cache.register(name, record.type_id, created=True)
        return key, record.type_id
