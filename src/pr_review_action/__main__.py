"""Run the action: python -m pr_review_action"""

from .action import cli

if __name__ == "__main__":
    cli()
