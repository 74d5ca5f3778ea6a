"""Domain layer of the ClutchPay service."""
