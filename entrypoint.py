"""Backend entrypoint for a packaged app. PyInstaller runs this; it starts uvicorn with port from env."""
# Import directly so the frozen bundle can resolve the package
# (uvicorn's string-based import fails under PyInstaller).
from ledger.__main__ import main


if __name__ == "__main__":
    main()
