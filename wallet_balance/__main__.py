import logging
import uvicorn
from dotenv import load_dotenv
from wallet_balance.config import Config
from wallet_balance.main import create_app, log_startup


def main():
    load_dotenv()
    config = Config.from_env()
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    log_startup(config)
    uvicorn.run(create_app(config), host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
