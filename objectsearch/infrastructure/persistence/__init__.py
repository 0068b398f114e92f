"""SQLAlchemy persistence: engine, session dependency and declarative Base."""
