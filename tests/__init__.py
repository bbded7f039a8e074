"""Test suite for dubbo-config."""
