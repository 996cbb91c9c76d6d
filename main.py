import uvicorn

from eduportal import config
from eduportal.app import app


if __name__ == "__main__":
    uvicorn.run(app, host=config.HOST, port=config.PORT)
