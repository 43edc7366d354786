"""Grid layout generator.

``build_map_matrix`` carves a connected dungeon into a square grid: a
biased walk from an entrance on the top row to a boss on the bottom
row, decorated with short side branches. ``dungeon_from_grid`` turns
such a grid into a playable :class:`Dungeon`.
"""

from __future__ import annotations

from dungeon_engine.core.constants import (
    BOSS_DIFFICULTY_BONUS,
    BRANCH_CHANCE,
    BRANCH_MAX_LENGTH,
    BRANCH_MIN_LENGTH,
    VERTICAL_STEP_BIAS,
)
from dungeon_engine.core.exceptions import GenerationError
from dungeon_engine.core.logging import get_logger
from dungeon_engine.engine.random_selection import chance, random_element, random_int
from dungeon_engine.generation.monsters import generate_monster
from dungeon_engine.generation.rooms import ENTRANCE_ROOM_ID, build_room
from dungeon_engine.models.dungeon import Dungeon, Room
from dungeon_engine.models.enums import SIDE_ROOM_CELLS, Direction, GridCell, RoomType


logger = get_logger(__name__)

Grid = list[list[GridCell | None]]
Cell = tuple[int, int]

MIN_GRID_SIZE = 3

CELL_ROOM_TYPES: dict[GridCell, RoomType] = {
    GridCell.ENTRANCE: RoomType.ENTRANCE,
    GridCell.BOSS: RoomType.LAIR,
    GridCell.CORRIDOR: RoomType.CORRIDOR,
    GridCell.MISC_ROOM: RoomType.CHAMBER,
    GridCell.ARMORY: RoomType.ARMORY,
    GridCell.TREASURE_ROOM: RoomType.TREASURY,
    GridCell.TRAP_ROOM: RoomType.CRYPT,
    GridCell.ENEMY_ROOM: RoomType.PRISON,
    GridCell.PUZZLE_ROOM: RoomType.LIBRARY,
}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _in_bounds(cell: Cell, size: int) -> bool:
    y, x = cell
    return 0 <= y < size and 0 <= x < size


def _carve_main_path(grid: Grid, entrance: Cell, boss: Cell) -> list[Cell]:
    """Walk from entrance to boss, marking corridor cells on the way.

    Each step moves vertically with probability 0.7 while rows differ,
    otherwise horizontally; once the columns line up the walk is forced
    vertical. Every step closes the distance, so the walk terminates.
    """
    path = [entrance]
    y, x = entrance
    while (y, x) != boss:
        dy = _sign(boss[0] - y)
        dx = _sign(boss[1] - x)
        if dy != 0 and (dx == 0 or chance(VERTICAL_STEP_BIAS)):
            y += dy
        else:
            x += dx
        if grid[y][x] is None:
            grid[y][x] = GridCell.CORRIDOR
        path.append((y, x))
    return path


def _grow_branch(grid: Grid, origin: Cell) -> int:
    """Extend a side branch from ``origin``; returns the cells added."""
    size = len(grid)
    dy, dx = random_element(list(Direction)).offset
    length = random_int(BRANCH_MIN_LENGTH, BRANCH_MAX_LENGTH)

    y, x = origin
    added = 0
    for _ in range(length):
        y, x = y + dy, x + dx
        if not _in_bounds((y, x), size) or grid[y][x] is not None:
            break
        grid[y][x] = random_element(SIDE_ROOM_CELLS)
        added += 1
    return added


def build_map_matrix(size: int) -> Grid:
    """Generate a square grid dungeon.

    Args:
        size: Side length of the grid, at least 3.

    Returns:
        ``size`` rows of ``size`` cells; each cell is None or a GridCell.
        The boss is always reachable from the entrance through 4-adjacent
        non-empty cells.

    Raises:
        GenerationError: If ``size`` is below 3.
    """
    if size < MIN_GRID_SIZE:
        raise GenerationError(
            f"Grid size must be at least {MIN_GRID_SIZE}, got {size}",
            details={"size": size},
        )

    grid: Grid = [[None] * size for _ in range(size)]
    entrance = (0, random_int(0, size - 1))
    boss = (size - 1, random_int(0, size - 1))
    grid[entrance[0]][entrance[1]] = GridCell.ENTRANCE
    grid[boss[0]][boss[1]] = GridCell.BOSS

    path = _carve_main_path(grid, entrance, boss)

    branch_cells = 0
    for cell in path:
        if chance(BRANCH_CHANCE):
            branch_cells += _grow_branch(grid, cell)

    logger.debug(
        "Map matrix built",
        size=size,
        path_length=len(path),
        branch_cells=branch_cells,
    )
    return grid


def find_cell(grid: Grid, target: GridCell) -> Cell | None:
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell == target:
                return (y, x)
    return None


def _room_id(cell_type: GridCell, y: int, x: int) -> str:
    if cell_type == GridCell.ENTRANCE:
        return ENTRANCE_ROOM_ID
    return f"room_{y}_{x}"


def dungeon_from_grid(grid: Grid, depth: int = 1, difficulty: int = 1) -> Dungeon:
    """Turn a map matrix into a playable dungeon.

    Every non-empty cell becomes a room linked to its 4-adjacent
    neighbours. The boss cell becomes a lair holding a monster two
    difficulty levels above the dungeon, and enemy rooms hold a monster
    of the dungeon's difficulty.

    Raises:
        GenerationError: If the grid has no entrance.
    """
    entrance = find_cell(grid, GridCell.ENTRANCE)
    if entrance is None:
        raise GenerationError("Grid has no entrance cell")

    size = len(grid)
    rooms: dict[str, Room] = {}
    ids: dict[Cell, str] = {}
    for y, row in enumerate(grid):
        for x, cell_type in enumerate(row):
            if cell_type is None:
                continue
            room_id = _room_id(cell_type, y, x)
            room = build_room(room_id, CELL_ROOM_TYPES[cell_type], difficulty)
            if cell_type == GridCell.BOSS:
                room.items = []
                room.monsters.append(generate_monster(difficulty + BOSS_DIFFICULTY_BONUS))
            elif cell_type == GridCell.ENEMY_ROOM:
                room.monsters.append(generate_monster(difficulty))
            rooms[room_id] = room
            ids[(y, x)] = room_id

    for (y, x), room_id in ids.items():
        for direction in Direction:
            dy, dx = direction.offset
            neighbour = (y + dy, x + dx)
            if _in_bounds(neighbour, size) and neighbour in ids:
                rooms[room_id].exits[direction] = ids[neighbour]

    dungeon = Dungeon(
        name=f"Level {depth}",
        depth=depth,
        difficulty=difficulty,
        rooms=rooms,
        start_room_id=ENTRANCE_ROOM_ID,
        grid=grid,
    )
    logger.info("Grid dungeon created", rooms=len(rooms), depth=depth, difficulty=difficulty)
    return dungeon


__all__ = [
    "Grid",
    "CELL_ROOM_TYPES",
    "build_map_matrix",
    "find_cell",
    "dungeon_from_grid",
]
