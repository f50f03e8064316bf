"""Scheduling domain - recurrence expansion and the merged calendar view"""
