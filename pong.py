import argparse
import logging

import pygame

from simulation import InputTracker, Side, new_game, snapshot, tick
from sounds import SoundBoard

FPS = 60
FONT_NAME = "monospace"

BG = (0x6F, 0x4E, 0x37)
PADDLE_COLOR = (0xEA, 0xDD, 0xCA)
BALL_COLOR = (0x80, 0x80, 0x00)
TEXT_COLOR = (0x59, 0x3E, 0x2D)

# message -> x offset from a quarter of the field width
MESSAGES = {
    "user_point": ("User got a point!", 75),
    "ai_point": ("Ai got a point!", 85),
    Side.USER: ("User wins!", 110),
    Side.AI: ("Ai wins!", 120),
}


def load_fonts():
    return {
        "score": pygame.font.SysFont(FONT_NAME, 100),
        "message": pygame.font.SysFont(FONT_NAME, 15),
    }


def draw_text(surface, font, text, x, y):
    # y is the text baseline; pygame blits from the top left
    img = font.render(text, True, TEXT_COLOR)
    surface.blit(img, (x, y - font.get_ascent()))


def banner(frame):
    if frame.winner is not None:
        return MESSAGES[frame.winner]
    if frame.user_point:
        return MESSAGES["user_point"]
    if frame.ai_point:
        return MESSAGES["ai_point"]
    return None


def render(surface, frame, fonts):
    surface.fill(BG)
    w, h = frame.width, frame.height
    draw_text(surface, fonts["score"], str(frame.user.score), w / 4 - 25, h / 2 + 25)
    draw_text(surface, fonts["score"], str(frame.ai.score), 3 * w / 4 - 25, h / 2 + 25)

    for paddle in (frame.user, frame.ai):
        pygame.draw.rect(surface, PADDLE_COLOR, (paddle.x, paddle.y, paddle.width, paddle.height))
    ball = frame.ball
    pygame.draw.circle(surface, BALL_COLOR, (ball.x, ball.y), ball.radius)

    message = banner(frame)
    if message:
        text, offset = message
        draw_text(surface, fonts["message"], text, w / 4 + offset, h / 2)


def handle_event(event, controls):
    """Route one pygame event. Returns False when the player wants out."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        controls.press(event.key)
    elif event.type == pygame.KEYUP:
        controls.release(event.key)
    return True


def game(max_ticks=None, mute=False):
    pygame.init()
    state = new_game(controls=InputTracker(pygame.K_UP, pygame.K_DOWN))
    try:
        screen = pygame.display.set_mode((int(state.bounds.width), int(state.bounds.height)))
        pygame.display.set_caption("Pong")
        clock = pygame.time.Clock()
        fonts = load_fonts()
        sounds = SoundBoard(enabled=not mute)

        ticks = 0
        running = True
        while running and (max_ticks is None or ticks < max_ticks):
            for event in pygame.event.get():
                if not handle_event(event, state.controls):
                    running = False

            sounds.play_all(tick(state))
            render(screen, snapshot(state), fonts)
            pygame.display.flip()

            ticks += 1
            clock.tick(FPS)
    finally:
        pygame.quit()
    return state


def main(argv=None):
    parser = argparse.ArgumentParser(description="Pong against a tracking AI (arrow keys to move).")
    parser.add_argument("--mute", action="store_true", help="disable sound cues")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="stop after this many frames (headless smoke runs)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    state = game(max_ticks=args.max_ticks, mute=args.mute)

    result = f"User {state.user.score} - {state.ai.score} Ai"
    if state.match.is_over:
        result += f" ({state.match.winner.value} wins)"
    print(result)


if __name__ == "__main__":
    main()
