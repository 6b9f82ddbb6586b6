"""Events, replay recording and logging setup."""
