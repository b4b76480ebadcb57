"""
Arcade renderer and sound cues for the runner.

The window only reads a RenderSnapshot; it never touches the world. Canvas
coordinates grow downward, arcade's grow upward, so every y is flipped.
"""

from __future__ import annotations

import random
from typing import Optional

import arcade

from .driver import FrameDriver
from .entities import InputIntent
from .projection import project, scale, screen_y
from .ui import AUDIO_CUES, InputMapper, format_score, health_is_low
from .world import RenderSnapshot

KEY_NAMES = {
    arcade.key.LEFT: "left",
    arcade.key.RIGHT: "right",
    arcade.key.SPACE: "fire",
}


class SoundBoard:
    """Plays a cue for each audio event the driver reports"""

    def __init__(self, volume: float = 0.3):
        self.volume = volume
        self.sounds = {event: arcade.load_sound(path) for event, path in AUDIO_CUES.items()}

    def __call__(self, event: str, count: int):
        sound = self.sounds.get(event)
        if sound is not None:
            arcade.play_sound(sound, volume=self.volume)


class RunnerWindow(arcade.Window):
    """Arcade window that draws snapshots and, when given a driver, plays the game"""

    def __init__(self, width: int, height: int, driver: Optional[FrameDriver] = None):
        super().__init__(width, height, "Neon Runner - Arcade")
        self.driver = driver
        self.snapshot: Optional[RenderSnapshot] = driver.world.snapshot() if driver else None
        self.controls = InputMapper(height)
        self.background_color = (5, 5, 16)

        # Colors
        self.GRID_C = (255, 0, 255)
        self.BUILDING_C = (20, 0, 40)
        self.BUILDING_EDGE_C = (0, 255, 255)
        self.SCOUT_C = (255, 68, 0)
        self.HEAVY_C = (255, 0, 0)
        self.POWERUP_C = (57, 255, 20)
        self.BULLET_C = (0, 255, 255)
        self.CAR_C = (255, 0, 255)
        self.HUD_C = (220, 220, 220)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in KEY_NAMES:
            self.controls.press(KEY_NAMES[symbol])
        if symbol == arcade.key.R and self.driver:
            self.driver.reset()

    def on_key_release(self, symbol: int, modifiers: int):
        if symbol in KEY_NAMES:
            self.controls.release(KEY_NAMES[symbol])

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        self.controls.pointer_down(x, self._y(y))

    def on_mouse_drag(self, x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int):
        self.controls.pointer_move(x, self._y(y))

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int):
        self.controls.pointer_up()

    def intent(self) -> InputIntent:
        return self.controls.intent()

    def on_update(self, delta_time: float):
        if self.driver:
            self.snapshot = self.driver.tick(self.intent())

    # ----------------------------
    # Drawing
    # ----------------------------

    def _y(self, y: float) -> float:
        return self.height - y

    def on_draw(self):
        self.clear()
        s = self.snapshot
        if s is None:
            return

        dx = dy = 0.0
        if s.shake_intensity > 0:
            dx = (random.random() - 0.5) * s.shake_intensity
            dy = (random.random() - 0.5) * s.shake_intensity

        self._draw_grid(s, dx, dy)
        self._draw_buildings(s, dx, dy)
        self._draw_enemies(s, dx, dy)
        self._draw_powerups(s, dx, dy)

        for p in s.explosions:
            alpha = int(255 * max(0.0, min(1.0, p.life)))
            arcade.draw_circle_filled(p.x + dx, self._y(p.y) + dy, p.size, (*p.color, alpha))

        for b in s.bullets:
            arcade.draw_circle_filled(b.x + dx, self._y(b.y) + dy, b.size / 2, self.BULLET_C)

        for eb in s.enemy_bullets:
            color = self.HEAVY_C if eb.damage > 20 else self.SCOUT_C
            arcade.draw_lrbt_rectangle_filled(
                eb.x - eb.size / 2 + dx, eb.x + eb.size / 2 + dx,
                self._y(eb.y + eb.size * 2) + dy, self._y(eb.y) + dy, color,
            )

        self._draw_car(s, dx, dy)
        self._draw_hud(s)

    def _draw_grid(self, s: RenderSnapshot, dx: float, dy: float):
        horizon = s.height / 2
        for i in range(10):
            z = (i + s.grid_offset) / 10
            y = self._y(screen_y(z, horizon, s.height)) + dy
            arcade.draw_line(0, y, s.width, y, self.GRID_C, 1)
        for i in range(-10, 11):
            x0 = s.width / 2 + i * 20
            x1 = s.width / 2 + i * 160
            arcade.draw_line(x0 + dx, self._y(horizon) + dy, x1 + dx, dy, self.GRID_C, 1)

    def _draw_buildings(self, s: RenderSnapshot, dx: float, dy: float):
        for b in sorted(s.buildings, key=lambda b: b.z):
            x, y = project(b.z, b.side * 500, s.width, s.height)
            k = scale(b.z)
            w = 160 * k * b.w_mult
            h = 300 * k * b.h_mult
            if w < 1 or h < 1:
                continue
            bottom = self._y(y) + dy
            arcade.draw_lrbt_rectangle_filled(x - w / 2 + dx, x + w / 2 + dx, bottom, bottom + h,
                                              self.BUILDING_C)
            arcade.draw_lrbt_rectangle_outline(x - w / 2 + dx, x + w / 2 + dx, bottom, bottom + h,
                                               self.BUILDING_EDGE_C, 1)
            # Window pattern is keyed on the seed so it doesn't flicker
            cols, rows = 3, max(2, int(4 * b.h_mult))
            for r in range(rows):
                for c in range(cols):
                    if (r * cols + c + b.window_seed) % 3 != 0:
                        continue
                    wl = x - w / 2 + (c + 0.2) * w / cols + dx
                    wb = bottom + (r + 0.2) * h / rows
                    arcade.draw_lrbt_rectangle_filled(wl, wl + 0.6 * w / cols, wb,
                                                      wb + 0.6 * h / rows, (255, 255, 150))

    def _draw_enemies(self, s: RenderSnapshot, dx: float, dy: float):
        for e in s.enemies:
            x, y = project(e.z, e.x_offset, s.width, s.height)
            w = (120 if e.is_heavy else 80) * e.z
            h = (45 if e.is_heavy else 30) * e.z
            base = self._y(y) + dy
            points = [(x - w / 2 + dx, base), (x + w / 2 + dx, base),
                      (x + w / 3 + dx, base + h), (x - w / 3 + dx, base + h)]
            alpha = int(255 * min(1.0, e.z * 4))
            color = self.HEAVY_C if e.is_heavy else self.SCOUT_C
            arcade.draw_polygon_filled(points, (26, 5, 5, alpha))
            arcade.draw_polygon_outline(points, (*color, alpha), 3 if e.is_heavy else 2)

    def _draw_powerups(self, s: RenderSnapshot, dx: float, dy: float):
        for p in s.powerups:
            x, y = project(p.z, p.x_offset, s.width, s.height)
            arcade.draw_circle_filled(x + dx, self._y(y) + dy, max(1.0, 15 * p.z), self.POWERUP_C)

    def _draw_car(self, s: RenderSnapshot, dx: float, dy: float):
        x = s.player_x + dx
        base = self._y(s.height - 40) + dy
        points = [(x - 40, base), (x + 40, base), (x + 25, base + 30), (x - 25, base + 30)]
        arcade.draw_polygon_filled(points, (20, 0, 30))
        arcade.draw_polygon_outline(points, self.CAR_C, 2)
        # One muzzle light per fire level, capped at the widest pattern
        for i in range(min(s.fire_level, 5)):
            arcade.draw_circle_filled(x - 20 + i * 10, base + 34, 3, self.BULLET_C)

    def _draw_hud(self, s: RenderSnapshot):
        bar_w, bar_h = 180, 10
        x0, y0 = 12, self.height - 22
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, (60, 60, 60))
        fill = bar_w * max(0, min(100, s.health)) / 100
        if fill > 0:
            color = (255, 0, 0) if health_is_low(s.health) else (57, 255, 20)
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + bar_h, color)

        arcade.draw_text(format_score(s.score), self.width - 200, self.height - 26, self.HUD_C, 14)
        if s.game_over:
            arcade.draw_text("GAME OVER - press R", self.width / 2 - 130, self.height / 2,
                             self.HUD_C, 22)


def play():
    """Interactive game on the wall clock"""
    driver = FrameDriver()
    driver.subscribe(SoundBoard())
    RunnerWindow(driver.config.width, driver.config.height, driver=driver)
    print("Arrows or drag steer, space or click fires, R restarts.")
    arcade.run()


if __name__ == "__main__":
    play()
