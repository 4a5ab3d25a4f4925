"""Chart composition services built on the dataset model."""
