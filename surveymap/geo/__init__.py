"""Geographic primitives: observations, bounds and the fetch cache."""
