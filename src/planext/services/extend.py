"""ExtendService — run extension chains over build plans.

Each run takes a plan, applies the requested extensions in order, and
reports either the final plan or the first extension error. Errors are
terminal: the remaining extensions are skipped and no plan is returned.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from planext.domain.errors import ExtensionError
from planext.infrastructure.filesystem import read_build_plan, write_build_plan
from planext.services.base import BaseService
from planext.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from planext.config.models import ExtensionConfig
    from planext.domain.buildplan import BuildPlan

logger = logging.getLogger(__name__)


def _summarize(plan: BuildPlan) -> dict[str, Any]:
    return {
        "layers": plan.layer_names(),
        "entrypoint": plan.entrypoint,
        "entries": sum(len(layer.entries) for layer in plan.layers),
    }


class ExtendService(BaseService):
    """Apply extensions to build plans."""

    def extend(self, plan: BuildPlan, specs: Sequence[ExtensionConfig]) -> ServiceResult:
        """Apply *specs* to *plan* in order."""
        result, _ = self._run(plan, specs)
        return result

    def extend_file(
        self,
        plan_path: Path,
        specs: Sequence[ExtensionConfig],
        *,
        output_path: Path | None = None,
    ) -> ServiceResult:
        """Load a JSON plan, extend it, and optionally write the result."""
        try:
            plan = read_build_plan(plan_path)
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            return ServiceResult(
                ok=False,
                op="extend",
                error=ServiceError(
                    code="INVALID_PLAN",
                    message=f"Cannot load build plan {plan_path}: {exc}",
                    detail={"path": str(plan_path)},
                ),
            )

        result, extended = self._run(plan, specs)
        if extended is None or output_path is None:
            return result

        try:
            write_build_plan(output_path, extended)
        except OSError as exc:
            return ServiceResult(
                ok=False,
                op="extend",
                error=ServiceError(
                    code="OUTPUT_ERROR",
                    message=f"Cannot write build plan {output_path}: {exc}",
                    detail={"path": str(output_path)},
                ),
            )
        return result.model_copy(update={"data": {**result.data, "output": str(output_path)}})

    def list_extensions(self) -> ServiceResult:
        """List registered extensions."""
        names = self._plugins.list_extension_names()
        return ServiceResult(
            ok=True,
            op="list_extensions",
            data={"count": len(names), "items": [{"name": n} for n in names]},
        )

    def _run(
        self, plan: BuildPlan, specs: Sequence[ExtensionConfig]
    ) -> tuple[ServiceResult, BuildPlan | None]:
        if not specs:
            error = ServiceError(
                code="NO_EXTENSIONS",
                message="No extensions requested; pass --extension or add [[extensions]]",
            )
            return ServiceResult(ok=False, op="extend", error=error), None

        start = time.perf_counter()
        try:
            extended = self._plugins.apply_all(plan, specs, self._project)
        except ExtensionError as exc:
            logger.debug("Extension %s failed: %s", exc.extension, exc.message)
            error = ServiceError.from_extension_error(exc)
            return ServiceResult(ok=False, op="extend", error=error), None
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

        names = [spec.name for spec in specs]
        warnings = [
            f"Extension {name} ran {names.count(name)} times"
            for name in dict.fromkeys(names)
            if names.count(name) > 1
        ]
        result = ServiceResult(
            ok=True,
            op="extend",
            warnings=warnings,
            data={
                "extensions": names,
                **_summarize(extended),
                "plan": extended.model_dump(mode="json"),
            },
            meta={"duration_ms": elapsed_ms},
        )
        return result, extended
