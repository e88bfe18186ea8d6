"""AeroTrack: aircraft assembly tracking API."""
