from coinbind.config.settings import CodecSettings, load_settings

__all__ = ["CodecSettings", "load_settings"]
