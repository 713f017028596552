"""Channel catalog loader and playback projection for the cast reference player."""
