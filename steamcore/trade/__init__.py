"""Automation of Steam web trade sessions."""