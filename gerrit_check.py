"""
Gerrit Check — review notifier
==============================
Polls a review server every few minutes for two things:
  - open changes where you are a reviewer (new patch sets or new changes)
  - your own open changes that have become submittable

Each finished poll publishes one status; the default subscriber logs it.

Usage:
    python gerrit_check.py --server https://review.example.com --project my/proj --user alice
    python gerrit_check.py --save ...        # remember the settings in ~/.gerrit-check/config.json
    python gerrit_check.py --once            # single poll using the saved settings
"""

import sys

from review_core.runner import main

if __name__ == "__main__":
    sys.exit(main())
