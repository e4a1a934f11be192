"""
Entry point for running the learnhub CLI as a module.

Usage:
    python -m learnhub replay answers.json
    python -m learnhub queue progress.json
    python -m learnhub --help
"""
from .cli import main

if __name__ == "__main__":
    main()
