"""Entry point for 'python -m accounthub' command."""

from accounthub.cli import main

if __name__ == "__main__":
    main()
