"""Runner Configs CLI"""
