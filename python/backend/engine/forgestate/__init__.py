from backend.engine.forgestate.state import ForgeState

__all__ = ["ForgeState"]
