"""Alert subscriptions and notifications."""
