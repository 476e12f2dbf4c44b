"""Entry point: python -m droid_recover"""

import uvicorn
from .config import settings


def main():
    uvicorn.run(
        "droid_recover.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
