"""
Subtitle Silence Skipper — Core Package

Speeds up the parts of a video where no dialogue is on screen, using the
timings of the external subtitle file loaded in mpv:
  - timestamps: SRT/ASS timestamp parsing
  - loader: subtitle file -> sorted dialogue intervals
  - index: next-interval lookup
  - decision: silent/dialogue decision for one position
  - controller: Normal/Silent speed state machine
  - session: toggle, reload and the sampling tick
  - host, mpv_ipc, player, runner: mpv integration
"""
