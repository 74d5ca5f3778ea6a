"""ClutchPay payment notification service."""
