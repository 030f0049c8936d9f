"""Configuration, authentication, logging, and the admin route catalog."""
