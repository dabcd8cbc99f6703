"""Vendor clients and the premium experience flow"""
