"""Room management console project package."""
