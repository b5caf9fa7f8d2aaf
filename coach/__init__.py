"""
Poker Coach: equity, ranges and pot-odds decisions.

Estimates a hero's equity against a table of opponents whose hands are
drawn from style-based starting ranges, using a Monte Carlo simulator on
top of a native 5/7-card hand evaluator, and turns the estimate into a
fold/call/raise recommendation.
"""

__version__ = "0.1.0"
