import logging

from uikit.app import App
from uikit.settings import load_settings
from tally.scenes.payments import PaymentsScene

def main():
    cfg = load_settings()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    App(cfg, PaymentsScene).run()

if __name__ == "__main__":
    main()
