"""
Bitbucket Provider Test Suite

Unit tests for the models, HTTP client, Pulumi provider, resources and CLI.
All HTTP traffic goes to an in-memory fake of the Bitbucket groups API.
"""
