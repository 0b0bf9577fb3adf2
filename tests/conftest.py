from eventforge.testing.fixtures import dispatcher  # noqa: F401
