"""Application services orchestrating the domain and infrastructure layers."""
