"""Runtime support shared across scm_observer: configuration and logging."""
