"""
Test suite for copyguard.

Run all: pytest evals/ -v
Run the analyzer checks only: pytest evals/tasks/test_checks.py -v
"""
