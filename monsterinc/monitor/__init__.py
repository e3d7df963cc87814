"""Fetching, hashing and change monitoring of remote files."""