"""Application layer – conditions, search, CRUD and transactions."""
