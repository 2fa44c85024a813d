"""Career Ledger: job application tracking backed by an append-only event log."""
