"""Bus Pass Application API"""
