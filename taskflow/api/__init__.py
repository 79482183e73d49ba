"""HTTP-boundary plumbing: middleware and error translation."""
