"""
Main entry point for the job_scorer package.

Usage:
    python -m job_scorer [command] [options]

See 'python -m job_scorer --help' for available commands.
"""

from job_scorer.cli import main

if __name__ == "__main__":
    main()
