"""Application services for the release pipeline.

Services implement the pipeline stages, coordinating between the domain
layer (release/) and infrastructure (platform/).
"""
