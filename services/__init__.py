"""
Veo Relay Services

Core services for the relay:
- video_generation: Veo client adapter and style presets
- relay: FastAPI HTTP surface
"""
