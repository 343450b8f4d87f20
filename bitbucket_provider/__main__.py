"""
Entry point for running the Bitbucket provider CLI as a module.
"""

from .cli import app

if __name__ == "__main__":
    app()
