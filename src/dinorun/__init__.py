"""
DINORUN - endless side-scrolling runner.

Jump over cacti, duck under pterodactyls and beat your best score.
"""

__version__ = "0.1.0"
