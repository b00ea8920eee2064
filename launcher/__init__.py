"""Management command line for telecom_provider."""
