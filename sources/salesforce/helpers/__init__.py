"""Salesforce source helpers"""
