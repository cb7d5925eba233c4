"""Resolve a key token to the most specific binding allowed by context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from reqtui.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


class KeymapResolver:
    """Picks among the bindings on one key.

    Candidates whose ``when`` clauses fail are skipped; the rest are ordered
    by priority, then by how many clauses they carry (more specific first),
    then by id so the outcome is stable.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[tuple[str, str], tuple[int, list[Binding]]] = {}

    def resolve(
        self,
        mode: str,
        token: str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> Optional[ResolutionMatch]:
        ctx = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "token": token},
        ) as handle:
            for binding in self._candidates(mode, token):
                if binding.allows(ctx):
                    handle.add_metadata("binding_id", binding.id)
                    return ResolutionMatch(
                        binding=binding,
                        action=self._registry.get_action(binding.action_id),
                    )
            handle.add_metadata("status", "miss")
            return None

    def reset(self) -> None:
        self._cache.clear()

    def _candidates(self, mode: str, token: str) -> list[Binding]:
        revision = self._registry.revision()
        cached = self._cache.get((mode, token))
        if cached and cached[0] == revision:
            return cached[1]
        ordered = sorted(
            self._registry.bindings_for(mode, token),
            key=lambda b: (-b.priority, -len(b.when), b.id),
        )
        self._cache[(mode, token)] = (revision, ordered)
        return ordered


__all__ = ["KeymapResolver", "ResolutionMatch"]
