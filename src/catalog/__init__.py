"""Search, aggregation and navigation engine behind the meal views"""
