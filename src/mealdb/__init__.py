"""Client and models for the MealDB catalog API"""
