"""Page views, routing and request envelopes."""
