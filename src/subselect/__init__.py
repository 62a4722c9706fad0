"""subselect - preference-driven audio and subtitle track selection.

Selects a primary audio track, a primary subtitle track and an optional
secondary subtitle track from a media file's tracks, using an ordered
list of preference rules.
"""

__version__ = "0.1.0"
