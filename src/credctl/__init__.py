"""Credential issuance toolkit for realm keypairs, device ids and API tokens."""
