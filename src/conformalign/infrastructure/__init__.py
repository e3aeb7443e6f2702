"""Infrastructure layer: conversions to and from third-party toolkits."""
