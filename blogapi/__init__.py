"""Blog Platform Backend."""
