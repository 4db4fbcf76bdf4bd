"""Design helpers: easing tokens, reduced motion and reveal pacing."""
