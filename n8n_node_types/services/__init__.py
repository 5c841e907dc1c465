"""Normalization and classification services"""
