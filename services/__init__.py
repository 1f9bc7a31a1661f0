"""Account lifecycle services, credentials and outbound notifications."""
