"""Main entry point for tankfield.

This script initializes and runs the tank simulation headless. Settings come
from TANKFIELD_* environment variables, see SimConfig.from_env.
"""

import logging

from tankfield.core.engine import Engine
from tankfield.config import SimConfig

def main() -> None:
    """Initializes and runs the tankfield simulation."""
    config = SimConfig.from_env()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("Initializing tankfield engine...")
    engine = Engine(config)
    try:
        engine.run()
    except KeyboardInterrupt:
        print("Interrupted.")
    finally:
        engine.shutdown()
    print("tankfield engine finished.")

if __name__ == "__main__":
    main()
