"""HTTP surface for the SEO health check."""
