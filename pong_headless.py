"""
Headless Pong runner.

Usage:
- python pong_headless.py --frames 3600 --seed 7             # player paddle idle
- python pong_headless.py --frames 3600 --seed 7 --autoplay  # pointer follows the ball

The simulation runs on a synthetic clock (frame / fps), so a given seed always
plays out the same way. render_rgb() rasterizes a snapshot without pygame.
"""
import argparse
import logging
from collections import deque
from typing import Deque, List

import numpy as np

import pong_core
from pong_core import Config

logger = logging.getLogger(__name__)

SPEED_HISTORY = 5000  # frames of ball speed kept for plotting


class HeadlessPong:
    def __init__(self, config=None, seed=None, autoplay=False, history=SPEED_HISTORY):
        self.config = config or Config()
        self.history = history
        self.seed = seed
        self.autoplay = autoplay
        self.reset()

    def reset(self):
        self.state = pong_core.new_game(self.config, self.seed)
        self.t = 0
        self.speeds: Deque[float] = deque(maxlen=self.history)
        self.top_speed = self.state.ball.speed
        self.rallies: List[int] = []
        self._rally_start = 0
        return pong_core.snapshot(self.state)

    @property
    def clock(self):
        return self.t / self.config.fps

    def step(self):
        if self.autoplay:
            pong_core.point(self.state, self.state.ball.y)
        scored = pong_core.tick(self.state, self.clock)
        self.t += 1
        self.speeds.append(self.state.ball.speed)
        self.top_speed = max(self.top_speed, self.state.ball.speed)
        if scored:
            self.rallies.append(self.state.frame - self._rally_start)
            self._rally_start = self.state.frame
        return pong_core.snapshot(self.state), scored

    def run(self, frames):
        for _ in range(frames):
            self.step()
        return pong_core.snapshot(self.state)


def render_rgb(snap, scale=1):
    # Return an RGB image of the court
    W, H = int(snap.width), int(snap.height)
    img = np.zeros((H, W, 3), dtype=np.uint8)
    img[:] = (25, 25, 30)  # background
    for y in range(0, H, 14):  # center dashed line
        img[y:y+8, W//2-1:W//2+1] = (70, 70, 80)
    for (x, y, w, h), color in ((snap.left, (125, 211, 252)), (snap.right, (252, 165, 165))):
        x0, y0 = int(x), int(y)
        img[y0:y0+int(h), x0:x0+int(w)] = color
    # ball as a filled disc
    bx, by, r = snap.ball
    yy, xx = np.ogrid[:H, :W]
    img[(xx - bx) ** 2 + (yy - by) ** 2 <= r * r] = (254, 243, 199)
    if scale != 1:
        img = np.repeat(np.repeat(img, scale, axis=0), scale, axis=1)
    return img


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run Pong without a window")
    parser.add_argument("--frames", type=int, default=3600)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--autoplay", action="store_true")
    parser.add_argument("--width", type=float, default=Config.width)
    parser.add_argument("--height", type=float, default=Config.height)
    parser.add_argument("--fps", type=int, default=Config.fps)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(name)s %(levelname)s %(message)s")
    cfg = Config(width=args.width, height=args.height, fps=args.fps)
    env = HeadlessPong(cfg, seed=args.seed, autoplay=args.autoplay)
    snap = env.run(args.frames)

    mean_rally = np.mean(env.rallies) if env.rallies else 0.0
    print(f"{args.frames} frames: score {snap.scores[0]} : {snap.scores[1]}, "
          f"{len(env.rallies)} rallies, mean rally {mean_rally:.1f} frames, "
          f"top speed {env.top_speed:.2f}")
    return snap


if __name__ == "__main__":
    main()
