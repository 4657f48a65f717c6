"""Pipeline services built on the audio helpers."""
