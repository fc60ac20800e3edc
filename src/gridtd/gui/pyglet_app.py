from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

import pyglet
from pyglet.window import key, mouse

from ..core.engine import Engine
from ..core.model.enemies import EnemyType, get_enemy_def
from ..core.model.grid import CELL_SIZE, Position, world_to_grid
from ..core.model.map import MapData, default_map, load_map_json
from ..core.model.towers import TowerType, get_tower_def, list_tower_defs


logger = logging.getLogger(__name__)

HUD_HEIGHT = 40
CELL_COLOR = (30, 30, 30)
BLOCKED_COLOR = (60, 60, 60)
SPAWN_COLOR = (50, 150, 50)
GOAL_COLOR = (150, 50, 50)
GRID_LINE_COLOR = (50, 50, 50)
ROUTE_COLOR = (40, 48, 40)
ENEMY_SLOWED_COLOR = (102, 191, 255)
BARREL_COLOR = (80, 80, 80)

TOWER_KEYS: dict[int, TowerType] = {
    key._1: TowerType.BASIC,
    key._2: TowerType.SNIPER,
    key._3: TowerType.SPLASH,
    key._4: TowerType.SLOW,
}


class SimpleGui:
    """
    Presentation adapter: draws ``Engine.observe()`` and turns input into
    engine intents. World y grows downward, pyglet's y grows upward.
    """

    def __init__(self, map_data: MapData) -> None:
        self.engine = Engine(map_data)
        self._grid_w = self.engine.width * CELL_SIZE
        self._grid_h = self.engine.height * CELL_SIZE
        self._placement_kind = TowerType.BASIC
        self._enemy_kind = EnemyType.BASIC
        self._selected_tower_id: int | None = None

        self.window = pyglet.window.Window(
            width=int(self._grid_w),
            height=int(self._grid_h) + HUD_HEIGHT,
            caption=f"gridtd - {map_data.name}",
        )
        self._hud_label = pyglet.text.Label(
            "",
            x=10,
            y=int(self._grid_h) + HUD_HEIGHT // 2,
            anchor_y="center",
            font_size=12,
            color=(240, 240, 240, 255),
        )
        self._pause_label = pyglet.text.Label(
            "PAUSED",
            x=int(self._grid_w) // 2,
            y=int(self._grid_h) // 2,
            anchor_x="center",
            anchor_y="center",
            font_size=40,
            color=(253, 249, 0, 255),
        )

        self.window.push_handlers(
            on_draw=self.on_draw,
            on_mouse_press=self.on_mouse_press,
            on_key_press=self.on_key_press,
        )
        pyglet.clock.schedule_interval(self.update, 1 / 60.0)

    def update(self, dt: float) -> None:
        self.engine.update(dt)
        if self._selected_tower_id is not None and self._selected_tower_id not in self.engine.towers:
            self._selected_tower_id = None

    # -- coordinates --------------------------------------------------------

    def _to_screen(self, x: float, y: float) -> tuple[float, float]:
        return x, self._grid_h - y

    def _cell_at(self, sx: float, sy: float) -> Position | None:
        if sy >= self._grid_h:
            return None
        pos = world_to_grid(sx, self._grid_h - sy)
        if not self.engine.in_bounds(pos):
            return None
        return pos

    # -- input --------------------------------------------------------------

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int) -> None:
        cell = self._cell_at(x, y)
        if cell is None:
            return
        tower = self.engine.state.tower_at(cell)
        if button == mouse.RIGHT:
            if tower is not None:
                refund = self.engine.sell_tower(tower.id)
                logger.info("sold tower %s at (%s,%s) for $%s", tower.id, cell.x, cell.y, refund)
            return
        if button != mouse.LEFT:
            return
        if tower is not None:
            self._selected_tower_id = tower.id
            return
        self._selected_tower_id = None
        if not self.engine.place_tower(self._placement_kind, cell):
            logger.info("cannot place %s at (%s,%s)", self._placement_kind.value, cell.x, cell.y)

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol == key.SPACE:
            self.engine.toggle_paused()
        elif symbol == key.E:
            if not self.engine.spawn_enemy(self._enemy_kind):
                logger.info("spawn failed: no path from spawn to goal")
        elif symbol == key.Q:
            kinds = list(EnemyType)
            self._enemy_kind = kinds[(kinds.index(self._enemy_kind) + 1) % len(kinds)]
        elif symbol == key.C:
            self.engine.clear_all()
            self._selected_tower_id = None
        elif symbol in TOWER_KEYS:
            self._placement_kind = TOWER_KEYS[symbol]

    # -- drawing ------------------------------------------------------------

    def on_draw(self) -> None:
        self.window.clear()
        obs = self.engine.observe()
        batch = pyglet.graphics.Batch()
        # Shapes must stay referenced until the batch is drawn.
        shapes: list[Any] = []
        self._draw_grid(obs, batch, shapes)
        self._draw_towers(obs, batch, shapes)
        self._draw_projectiles(obs, batch, shapes)
        self._draw_effects(obs, batch, shapes)
        self._draw_enemies(obs, batch, shapes)
        batch.draw()

        self._hud_label.text = self._hud_text(obs)
        self._hud_label.draw()
        if obs["paused"]:
            self._pause_label.draw()

    def _hud_text(self, obs: dict[str, Any]) -> str:
        tower_def = get_tower_def(self._placement_kind)
        enemy_def = get_enemy_def(self._enemy_kind)
        status = "  GAME OVER" if obs["game_over"] else ""
        return (
            f"Gold: ${obs['gold']}   Health: {obs['health']}   "
            f"Enemies: {len(obs['enemies'])}   Towers: {len(obs['towers'])}   "
            f"Build: {tower_def.title} (${tower_def.cost})   "
            f"Spawn: {enemy_def.title}{status}"
        )

    def _draw_grid(self, obs: dict[str, Any], batch, shapes: list[Any]) -> None:
        walkable = self.engine.walkable_mask()
        route = set(self.engine.route_preview())
        spawn = Position(*obs["spawn"])
        goal = Position(*obs["goal"])
        for cy in range(obs["height"]):
            for cx in range(obs["width"]):
                pos = Position(cx, cy)
                if not walkable[cy, cx]:
                    color = BLOCKED_COLOR
                elif pos == spawn:
                    color = SPAWN_COLOR
                elif pos == goal:
                    color = GOAL_COLOR
                elif pos in route:
                    color = ROUTE_COLOR
                else:
                    color = CELL_COLOR
                sx, sy = self._to_screen(cx * CELL_SIZE, (cy + 1) * CELL_SIZE)
                shapes.append(
                    pyglet.shapes.BorderedRectangle(
                        sx,
                        sy,
                        CELL_SIZE,
                        CELL_SIZE,
                        border=1,
                        color=color,
                        border_color=GRID_LINE_COLOR,
                        batch=batch,
                    )
                )

    def _draw_towers(self, obs: dict[str, Any], batch, shapes: list[Any]) -> None:
        for tower in obs["towers"]:
            tower_def = get_tower_def(tower["kind"])
            cx, cy = tower["cell"]
            sx, sy = self._to_screen((cx + 0.5) * CELL_SIZE, (cy + 0.5) * CELL_SIZE)
            if tower["id"] == self._selected_tower_id:
                ring = pyglet.shapes.Arc(sx, sy, tower_def.range * CELL_SIZE, color=(100, 100, 100), batch=batch)
                ring.opacity = 120
                shapes.append(ring)
            shapes.append(pyglet.shapes.Circle(sx, sy, CELL_SIZE * 0.4, color=tower_def.color, batch=batch))
            barrel = CELL_SIZE * 0.5
            # Screen y is flipped, so the barrel angle is mirrored.
            end_x = sx + barrel * math.cos(tower["rotation"])
            end_y = sy - barrel * math.sin(tower["rotation"])
            shapes.append(pyglet.shapes.Line(sx, sy, end_x, end_y, 4, color=BARREL_COLOR, batch=batch))

    def _draw_projectiles(self, obs: dict[str, Any], batch, shapes: list[Any]) -> None:
        for projectile in obs["projectiles"]:
            color = get_tower_def(projectile["kind"]).projectile_color
            sx, sy = self._to_screen(projectile["x"], projectile["y"])
            shapes.append(pyglet.shapes.Circle(sx, sy, 5, color=color, batch=batch))

    def _draw_effects(self, obs: dict[str, Any], batch, shapes: list[Any]) -> None:
        for flash in obs["muzzle_flashes"]:
            sx, sy = self._to_screen(flash["x"], flash["y"])
            circle = pyglet.shapes.Circle(sx, sy, 8, color=flash["color"], batch=batch)
            circle.opacity = int(255 * flash["alpha"])
            shapes.append(circle)
        for boom in obs["explosions"]:
            if boom["radius"] <= 0.0:
                continue
            sx, sy = self._to_screen(boom["x"], boom["y"])
            arc = pyglet.shapes.Arc(sx, sy, boom["radius"], color=boom["color"], batch=batch)
            arc.opacity = int(255 * boom["alpha"] * 0.5)
            shapes.append(arc)

    def _draw_enemies(self, obs: dict[str, Any], batch, shapes: list[Any]) -> None:
        bar_w = CELL_SIZE * 0.6
        for enemy in obs["enemies"]:
            sx, sy = self._to_screen(enemy["x"], enemy["y"])
            enemy_def = get_enemy_def(enemy["kind"])
            color = ENEMY_SLOWED_COLOR if enemy["slowed"] else enemy_def.color
            radius = CELL_SIZE * enemy_def.size
            shapes.append(pyglet.shapes.Circle(sx, sy, radius, color=color, batch=batch))

            ratio = enemy["health"] / enemy["max_health"] if enemy["max_health"] else 0.0
            bar_x = sx - bar_w / 2
            bar_y = sy + radius + 4
            shapes.append(pyglet.shapes.Rectangle(bar_x, bar_y, bar_w, 4, color=(80, 80, 80), batch=batch))
            if ratio > 0.0:
                bar_color = (0, 228, 48) if ratio > 0.5 else (255, 161, 0)
                shapes.append(
                    pyglet.shapes.Rectangle(bar_x, bar_y, bar_w * ratio, 4, color=bar_color, batch=batch)
                )


def run(map_path: str | Path | None = None) -> None:
    map_data = load_map_json(map_path) if map_path is not None else default_map()
    logger.info(
        "controls: 1-4 pick tower, click place/select, right click sell, E spawn, "
        "Q enemy kind, Space pause, C clear"
    )
    logger.info("available towers: %s", ", ".join(d.title for d in list_tower_defs()))
    _app = SimpleGui(map_data)
    pyglet.app.run()
