"""Test suite for rembg_batch."""
