"""Application layer: use cases (admin, account, profile, session) over capability interfaces."""
