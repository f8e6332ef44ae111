"""Allow ``python -m photo_shell``."""

from photo_shell.shell.console import main

if __name__ == "__main__":
    main()
