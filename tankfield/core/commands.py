import logging
from typing import Any, List, Tuple

import esper

logger = logging.getLogger(__name__)

class CommandBuffer:
    """Records structural changes during a tick and applies them at the barrier.

    Systems never create or delete entities while iterating esper queries.
    They push spawn and despawn requests here; CommandFlushSystem applies
    them once every other processor has finished for the tick.
    """

    def __init__(self) -> None:
        self._spawns: List[Tuple[Any, ...]] = []
        self._despawns: List[int] = []

    def spawn(self, *components: Any) -> None:
        self._spawns.append(components)

    def despawn(self, entity: int) -> None:
        self._despawns.append(entity)

    def despawn_many(self, entities: List[int]) -> None:
        self._despawns.extend(entities)

    @property
    def pending(self) -> int:
        return len(self._spawns) + len(self._despawns)

    def apply(self) -> Tuple[int, int]:
        """Applies all recorded commands to the current esper world.

        Returns:
            (spawned, despawned) counts for this flush.
        """
        despawned = 0
        for entity in self._despawns:
            if esper.entity_exists(entity):
                esper.delete_entity(entity, immediate=True)
                despawned += 1
        for components in self._spawns:
            esper.create_entity(*components)

        spawned = len(self._spawns)
        self._spawns.clear()
        self._despawns.clear()
        if spawned or despawned:
            logger.debug("Applied commands: %d spawned, %d despawned", spawned, despawned)
        return spawned, despawned
