import argparse
import logging
import time

import pygame

import pong_core
from pong_core import Config, DOWN, UP

FONT_NAME = "arial"

WHITE = (240, 240, 240)
BG = (25, 25, 30)
DIM = (120, 120, 140)
LEFT_COLOR = (125, 211, 252)
RIGHT_COLOR = (252, 165, 165)
BALL_COLOR = (254, 243, 199)

KEYMAP = {
    pygame.K_UP: UP, pygame.K_w: UP,
    pygame.K_DOWN: DOWN, pygame.K_s: DOWN,
}

logger = logging.getLogger(__name__)


def draw_center_dashed_line(surface, width, height):
    dash_h = 8
    gap = 6
    x = int(width // 2) - 1
    for y in range(0, int(height), dash_h + gap):
        pygame.draw.rect(surface, (70, 70, 80), (x, y, 2, dash_h))


def new_held():
    return {UP: set(), DOWN: set()}


def handle_event(state, event, held):
    """Feed one pygame event into the game. Returns False when the window should close.

    held maps each direction to the keys currently down for it, so releasing W
    does not stop the paddle while Up is still held.
    """
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key == pygame.K_p:
            pong_core.toggle_pause(state)
        elif event.key in KEYMAP:
            direction = KEYMAP[event.key]
            held[direction].add(event.key)
            pong_core.press(state, direction)
    elif event.type == pygame.KEYUP:
        if event.key in KEYMAP:
            direction = KEYMAP[event.key]
            held[direction].discard(event.key)
            if not held[direction]:
                pong_core.release(state, direction)
    elif event.type == pygame.MOUSEMOTION:
        pong_core.point(state, event.pos[1])
    elif event.type == pygame.FINGERMOTION:
        # finger coordinates are normalized to the window
        pong_core.point(state, event.y * state.config.height)
    elif event.type == pygame.MOUSEBUTTONDOWN:
        # SDL turns a tap into FINGERDOWN plus a MOUSEBUTTONDOWN (touch=True);
        # only the click toggles, so a tap pauses once and a drag never does
        pong_core.toggle_pause(state)
    return True


def draw(screen, snap, font_big, font_small):
    screen.fill(BG)
    draw_center_dashed_line(screen, snap.width, snap.height)
    pygame.draw.rect(screen, LEFT_COLOR, pygame.Rect(*snap.left))
    pygame.draw.rect(screen, RIGHT_COLOR, pygame.Rect(*snap.right))
    bx, by, r = snap.ball
    pygame.draw.circle(screen, BALL_COLOR, (int(bx), int(by)), int(r))

    score_l, score_r = snap.scores
    score_text = font_big.render(f"{score_l}   {score_r}", True, WHITE)
    screen.blit(score_text, (snap.width // 2 - score_text.get_width() // 2, 20))
    info = "click / P: pause | mouse or Up/Down: move"
    if not snap.running:
        info = "paused | " + info
    info_text = font_small.render(info, True, DIM)
    screen.blit(info_text, (20, snap.height - 28))


def game(config=None, seed=None):
    cfg = config or Config()
    pygame.init()
    try:
        screen = pygame.display.set_mode((int(cfg.width), int(cfg.height)))
        pygame.display.set_caption("Pong 0 : 0")
        clock = pygame.time.Clock()
        font_small = pygame.font.SysFont(FONT_NAME, 18)
        font_big = pygame.font.SysFont(FONT_NAME, 54, bold=True)

        state = pong_core.new_game(cfg, seed)
        held = new_held()
        while True:
            for event in pygame.event.get():
                if not handle_event(state, event, held):
                    return state.scores

            if pong_core.tick(state, time.monotonic()):
                pygame.display.set_caption(f"Pong {state.scores.left} : {state.scores.right}")

            draw(screen, pong_core.snapshot(state), font_big, font_small)
            pygame.display.flip()
            clock.tick(cfg.fps)
    finally:
        pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Pong against a scripted opponent")
    parser.add_argument("--width", type=float, default=Config.width)
    parser.add_argument("--height", type=float, default=Config.height)
    parser.add_argument("--fps", type=int, default=Config.fps)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    cfg = Config(width=args.width, height=args.height, fps=args.fps)
    scores = game(cfg, args.seed)
    logger.info("final score %d : %d", scores.left, scores.right)


if __name__ == "__main__":
    main()
