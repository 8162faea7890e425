"""Allow ``python -m DicomDictionary``."""

from .cli import app

if __name__ == "__main__":
    app()
