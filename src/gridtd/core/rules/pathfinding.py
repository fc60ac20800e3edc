from __future__ import annotations

import heapq
from itertools import count

from ..model.grid import Grid, Position


def heuristic(pos: Position, goal: Position) -> int:
    return pos.manhattan_distance(goal)


def find_path(grid: Grid, start: Position, goal: Position) -> list[Position] | None:
    """
    A* over the 4-connected walkable cells of ``grid``.

    Returns the shortest path from ``start`` to ``goal`` (both included), or
    None when either end is blocked or the two are not connected.

    Open-set order is ``(g + h, h, insertion)``: on equal total cost the
    node closer to the goal is expanded first, then the oldest entry. Closed
    nodes are never expanded again; superseded heap entries are dropped
    when popped.
    """
    if not grid.is_walkable(start) or not grid.is_walkable(goal):
        return None

    seq = count()
    start_h = heuristic(start, goal)
    open_heap: list[tuple[int, int, int, int, Position]] = [(start_h, start_h, next(seq), 0, start)]
    g_scores: dict[Position, int] = {start: 0}
    came_from: dict[Position, Position] = {}
    closed: set[Position] = set()

    while open_heap:
        _, _, _, g, current = heapq.heappop(open_heap)

        if current == goal:
            return _reconstruct_path(came_from, current)

        if current in closed:
            continue
        closed.add(current)

        tentative_g = g + 1
        for neighbor in current.neighbors():
            if neighbor in closed or not grid.is_walkable(neighbor):
                continue
            known = g_scores.get(neighbor)
            if known is not None and tentative_g >= known:
                continue
            came_from[neighbor] = current
            g_scores[neighbor] = tentative_g
            h = heuristic(neighbor, goal)
            heapq.heappush(open_heap, (tentative_g + h, h, next(seq), tentative_g, neighbor))

    return None


def _reconstruct_path(came_from: dict[Position, Position], current: Position) -> list[Position]:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def simplify_path(path: list[Position]) -> list[Position]:
    """Keep both ends and every turn; straight runs collapse to their endpoints."""
    if len(path) <= 2:
        return list(path)

    waypoints = [path[0]]
    for prev, current, nxt in zip(path, path[1:], path[2:]):
        incoming = (current.x - prev.x, current.y - prev.y)
        outgoing = (nxt.x - current.x, nxt.y - current.y)
        if incoming != outgoing:
            waypoints.append(current)
    waypoints.append(path[-1])
    return waypoints


def find_waypoints(grid: Grid, start: Position, goal: Position) -> list[Position] | None:
    full_path = find_path(grid, start, goal)
    if full_path is None:
        return None
    return simplify_path(full_path)


def expand_waypoints(waypoints: list[Position]) -> list[Position]:
    """Inverse of ``simplify_path``: every cell walked between consecutive waypoints."""
    if not waypoints:
        return []
    cells = [waypoints[0]]
    for a, b in zip(waypoints, waypoints[1:]):
        step_x = (b.x > a.x) - (b.x < a.x)
        step_y = (b.y > a.y) - (b.y < a.y)
        if step_x and step_y:
            raise ValueError(f"Waypoints {a} -> {b} are not axis-aligned")
        x, y = a.x, a.y
        while (x, y) != (b.x, b.y):
            x += step_x
            y += step_y
            cells.append(Position(x, y))
    return cells
