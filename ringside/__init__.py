"""
Ringside - Roster lifecycle core for a wrestling promotion.

Wrestlers, referees, managers, tag teams, titles and stables move through
employment and activation states recorded as time-stamped periods. This
package owns the rules for those transitions and the cascades they trigger
across championships and memberships.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
