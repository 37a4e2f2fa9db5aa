from base_analyzer.decoding.log_decoder import decode_log, decode_logs

__all__ = ["decode_log", "decode_logs"]
