"""Allow running the host as a module: python -m plughost."""

from plughost.runner import main

if __name__ == "__main__":
    main()
