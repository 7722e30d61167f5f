# File: src/wall_layer_decomposer/decomposer/batch.py

"""Wall decomposition orchestrator.

Sequences the pipeline for each selected wall:

1. Read the wall's layer structure from the model store
2. Resolve one centerline per layer
3. Classify each layer to a single-layer type and create a segment
4. Detect junctions at the original wall's endpoints
5. Group segments and trim/extend them at every junction
6. Remove the original wall

Errors are recorded per layer, per junction and per trim. A wall that
fails unexpectedly has its segments removed and is left in place; it
never stops the remaining walls. Only failures of the store itself
escape, and inside run_batch they roll the whole batch back.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from ..config.settings import DecompositionSettings, DEFAULT_SETTINGS
from ..errors import (
    DecompositionError,
    GeometryUnavailableError,
    LayerThicknessMismatchError,
    ModelStoreError,
    NotCompositeError,
    SegmentCreationError,
    TransactionFatalError,
    TypeCreationError,
    WallNotFoundError,
)
from ..model_store.base import ModelStore
from ..wall_data.attribute_policies import copy_segment_attributes
from ..wall_junctions.junction_detector import detect_junctions
from ..wall_junctions.junction_resolver import group_segments, resolve_junction
from ..wall_layers.layer_geometry import resolve_layer_geometry
from ..wall_layers.layer_types import CompositeWallSpec, Junction, WallSegment
from ..wall_types.type_classifier import WallTypeCache, WallTypeClassifier
from .results import BatchSummary, DecompositionResult, PurgeResult

logger = logging.getLogger(__name__)


class WallDecomposer:
    """Decomposes composite walls of a model store into single-layer walls.

    The type cache is shared by every call on the same decomposer, so
    identical layers across walls and across runs reuse one type.

    Args:
        store: Model store holding the walls.
        settings: Tolerances, naming and template configuration.
        cache: Type cache to share; a new one is created if omitted.
        logger: Logger receiving diagnostics.
    """

    def __init__(
        self,
        store: ModelStore,
        settings: Optional[DecompositionSettings] = None,
        cache: Optional[WallTypeCache] = None,
        logger: logging.Logger = logger,
    ) -> None:
        self.store = store
        self.settings = settings or DEFAULT_SETTINGS
        self.logger = logger
        self.classifier = WallTypeClassifier(store, cache, self.settings, logger)
        self._generated_ids: Set[str] = set()

    @property
    def cache(self) -> WallTypeCache:
        return self.classifier.cache

    # =========================================================================
    # Public operations
    # =========================================================================

    def decompose(self, wall_id: str) -> DecompositionResult:
        """Decompose one wall and remove it if any segment was created."""
        result = self._decompose_wall(wall_id)
        if result.succeeded:
            self.store.delete_element(wall_id)
            result.original_removed = True
        return result

    def detect_junctions(
        self, wall_id: str, tolerance_mm: Optional[float] = None
    ) -> List[Junction]:
        """Junctions at the endpoints of a wall, ignoring generated segments.

        Raises:
            WallNotFoundError: No wall with this id.
            GeometryUnavailableError: The wall has no location line.
        """
        wall = self.store.get_wall(wall_id)
        if wall is None:
            raise WallNotFoundError(f"Wall {wall_id} not found", wall_id=wall_id)
        if wall.location_line is None:
            raise GeometryUnavailableError(
                f"Wall {wall_id} has no location line", wall_id=wall_id
            )
        tolerance = (
            self.settings.junction_tolerance_mm if tolerance_mm is None else tolerance_mm
        )
        return detect_junctions(
            wall.location_line,
            self.store.enumerate_walls(excluding=self._generated_ids),
            tolerance,
            target_id=wall_id,
            logger=self.logger,
        )

    def purge_unused_generated_types(self) -> PurgeResult:
        """Delete generated wall types that no wall uses."""
        marker = self.settings.generated_type_marker
        result = PurgeResult()
        for wall_type in self.store.list_wall_types():
            if not wall_type.name.lower().startswith(marker):
                continue
            if self.store.is_type_in_use(wall_type.type_id):
                result.kept += 1
                continue
            try:
                self.store.delete_element(wall_type.type_id)
            except ModelStoreError as e:
                self.logger.warning("Could not delete type %s: %s", wall_type.name, e)
                result.kept += 1
                continue
            self.cache.forget(wall_type.name)
            result.purged += 1
            result.purged_names.append(wall_type.name)

        self.logger.info("Purged %d unused generated type(s), kept %d",
                         result.purged, result.kept)
        return result

    def run_batch(self, wall_ids: Iterable[str], purge: bool = False) -> BatchSummary:
        """Decompose several walls inside one store transaction.

        Originals are removed only after every wall has been processed,
        so each wall is reconciled against its neighbours' original layer
        structure rather than against their segments.

        Raises:
            TransactionFatalError: The store failed; nothing was changed.
        """
        summary = BatchSummary()
        created_before = self.cache.created
        hits_before = self.cache.hits
        generated_before = set(self._generated_ids)
        seen: Set[str] = set()

        try:
            with self.store.transaction():
                for wall_id in wall_ids:
                    if wall_id in seen:
                        self.logger.debug("Wall %s listed twice, ignored", wall_id)
                        continue
                    seen.add(wall_id)
                    summary.results.append(self._decompose_wall(wall_id))

                for result in summary.results:
                    if result.succeeded:
                        self.store.delete_element(result.wall_id)
                        result.original_removed = True

                if purge:
                    summary.purge = self.purge_unused_generated_types()
        except TransactionFatalError:
            # Types created in the batch no longer exist in the store
            self.cache.clear()
            self._generated_ids = generated_before
            raise

        summary.types_created = self.cache.created - created_before
        summary.types_reused = self.cache.hits - hits_before
        for line in summary.summary_lines():
            self.logger.info(line)
        return summary

    # =========================================================================
    # Pipeline
    # =========================================================================

    def _decompose_wall(self, wall_id: str) -> DecompositionResult:
        result = DecompositionResult(wall_id=wall_id)
        self.logger.info("Decomposing wall %s", wall_id)

        try:
            self._process_wall(wall_id, result)
        except (TransactionFatalError, ModelStoreError):
            raise
        except Exception as e:
            self.logger.error("Wall %s failed, left untouched: %s", wall_id, e)
            self._discard_segments(result)
            result.record(DecompositionError(
                f"Unexpected failure: {e}", wall_id=wall_id,
                extra={"exception": type(e).__name__},
            ))
        return result

    def _process_wall(self, wall_id: str, result: DecompositionResult) -> None:
        try:
            spec = self.store.get_wall_spec(wall_id)
            geometries = resolve_layer_geometry(spec, self.settings, self.logger)
        except (WallNotFoundError, GeometryUnavailableError,
                NotCompositeError, LayerThicknessMismatchError) as e:
            self.logger.warning("Wall %s skipped: %s", wall_id, e.detail)
            result.record(e)
            return

        if not geometries:
            error = GeometryUnavailableError(
                f"Wall {wall_id} has no layer geometry to decompose", wall_id=wall_id
            )
            self.logger.warning("Wall %s skipped: %s", wall_id, error.detail)
            result.record(error)
            return

        self._create_segments(spec, geometries, result)
        if not result.succeeded:
            self.logger.warning("No segment created for wall %s, left untouched", wall_id)
            return

        initial_lines = {s.element_id: s.centerline for s in result.created_segments}
        self._reconcile_junctions(spec, result)

        for segment in result.created_segments:
            if segment.centerline != initial_lines[segment.element_id]:
                self.store.set_wall_curve(segment.element_id, segment.centerline)

        self.logger.info("Wall %s: %d segment(s), %d junction(s), %d error(s)",
                         wall_id, len(result.created_segments),
                         len(result.junctions), len(result.errors))

    def _discard_segments(self, result: DecompositionResult) -> None:
        """Delete the segments already created for a wall that failed."""
        for segment in result.created_segments:
            self.store.delete_element(segment.element_id)
            self._generated_ids.discard(segment.element_id)
        result.created_segments = []
        result.junctions = []
        result.resolutions = []

    def _create_segments(
        self,
        spec: CompositeWallSpec,
        geometries: Dict,
        result: DecompositionResult,
    ) -> None:
        wall = self.store.get_wall(spec.wall_id)
        attributes = copy_segment_attributes(wall.attributes if wall else {})

        for index, geometry in geometries.items():
            layer = spec.layers[index]
            try:
                key, type_id = self.classifier.classify(layer)
                record = self.store.create_wall_segment(
                    geometry.centerline, type_id, spec.level_id, spec.height,
                    attributes,
                )
            except (TypeCreationError, SegmentCreationError) as e:
                self.logger.warning("Layer %d of wall %s skipped: %s",
                                    index, spec.wall_id, e.detail)
                result.record(e)
                continue

            self._generated_ids.add(record.element_id)
            result.created_segments.append(WallSegment(
                element_id=record.element_id,
                source_wall_id=spec.wall_id,
                layer_index=index,
                type_key=key,
                type_id=type_id,
                centerline=geometry.centerline,
                thickness=geometry.thickness,
                height=spec.height,
                level_id=spec.level_id,
            ))

    def _connected_spec(self, wall_id: str) -> Optional[CompositeWallSpec]:
        """Layer structure of a connected wall, or None if it is not composite."""
        try:
            return self.store.get_wall_spec(wall_id)
        except (NotCompositeError, GeometryUnavailableError) as e:
            self.logger.debug("Connected wall %s treated as simple: %s", wall_id, e.detail)
            return None

    def _reconcile_junctions(
        self, spec: CompositeWallSpec, result: DecompositionResult
    ) -> None:
        result.junctions = detect_junctions(
            spec.reference_line,
            self.store.enumerate_walls(excluding=self._generated_ids),
            self.settings.junction_tolerance_mm,
            target_id=spec.wall_id,
            logger=self.logger,
        )
        groups = group_segments(result.created_segments)

        for junction in result.junctions:
            connected_id = junction.connected_wall_id
            try:
                resolution = resolve_junction(
                    groups, junction, self._connected_spec(connected_id),
                    self.settings, self.logger,
                )
            except (TransactionFatalError, ModelStoreError):
                raise
            except LayerThicknessMismatchError as e:
                self.logger.warning("Connected wall %s: %s, treated as simple",
                                    connected_id, e.detail)
                result.errors.append(e)
                resolution = resolve_junction(
                    groups, junction, None, self.settings, self.logger
                )
            except Exception as e:
                self.logger.warning("Connected wall %s could not be resolved, "
                                    "treated as simple: %s", connected_id, e)
                result.record(DecompositionError(
                    f"Connected wall {connected_id} could not be resolved: {e}",
                    extra={"connected_wall_id": connected_id,
                           "exception": type(e).__name__},
                ))
                resolution = resolve_junction(
                    groups, junction, None, self.settings, self.logger
                )
            result.resolutions.append(resolution)
            for error in resolution.errors:
                result.record(error)
