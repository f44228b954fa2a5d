# src/flappy/game.py
# command is python -m src.flappy.game
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r, K_n, K_1, K_2, K_3
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT, ASSETS_DIR, DIFFICULTY_DEFAULT, DIFFICULTY_SETTINGS
from .assets import AssetStore
from .render import Renderer
from .state import Events, Game

DIFFICULTY_KEYS = {K_1: "easy", K_2: "normal", K_3: "hard"}
NEW_SEED = "new_seed"   # driver-only request, not an Events field


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy Bird, pixel edition")
    p.add_argument("--seed", type=int, default=None,
                   help="Pipe seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--difficulty", choices=sorted(DIFFICULTY_SETTINGS), default=DIFFICULTY_DEFAULT)
    p.add_argument("--assets", default=ASSETS_DIR, help="Directory holding the sprite PNGs")
    p.add_argument("--debug", action="store_true", help="Verbose logging")
    return p.parse_args(argv)


def resolve_seed(arg_seed):
    # None -> SEED_DEFAULT; -1 -> random
    if arg_seed is None:
        return SEED_DEFAULT
    if arg_seed == -1:
        return None
    return arg_seed


def collect_events(pending: dict) -> bool:
    """Translate device events into the next tick's Events fields. Returns False on quit."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            if event.key == K_SPACE:
                pending["flap"] = True
            elif event.key == K_r:
                pending["reset"] = True
            elif event.key == K_n:
                # restart with a new random pipe seed
                pending["reset"] = True
                pending[NEW_SEED] = True
            elif event.key in DIFFICULTY_KEYS:
                pending["set_difficulty"] = DIFFICULTY_KEYS[event.key]
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            pending["flap"] = True
        if event.type == pygame.FINGERDOWN:
            pending["flap"] = True
    return True


def apply_input(game: Game, pending: dict):
    """Feed one frame of collected input to the game."""
    if pending.pop(NEW_SEED, False):
        game.reseed(None)
        logging.getLogger(__name__).info("New random seed: %d", game.seed)
    return game.update(Events(**pending))


def run(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug)
    logger = logging.getLogger(__name__)

    game = Game(difficulty=args.difficulty, seed=resolve_seed(args.seed))
    logger.info("Starting: difficulty=%s seed=%d", args.difficulty, game.seed)

    pygame.init()
    pygame.display.set_caption("Flappy Bird — Pixel Edition")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()

    assets = AssetStore(args.assets)
    renderer = Renderer(assets, debug=args.debug)

    while True:
        pending = {}
        if not collect_events(pending):
            break

        # no ticks until every asset has been attempted
        if not assets.ready:
            assets.poll()
            renderer.draw_loading(screen)
        else:
            apply_input(game, pending)
            renderer.draw(screen, game.snapshot(), seed=game.seed)

        pygame.display.flip()
        clock.tick(FPS)

    logger.info("Quit: high score %d", game.state.high_score)
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    run()
