from backend.engine.forgeplay.session import ForgeSession

__all__ = ["ForgeSession"]
