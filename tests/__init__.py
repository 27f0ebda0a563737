# This file makes the tests directory a Python package.
