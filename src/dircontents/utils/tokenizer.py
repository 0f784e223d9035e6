# src/dircontents/utils/tokenizer.py
import tiktoken


class Tokenizer:
    """Estimates how many tokens a packed report will cost a language model."""

    _encoding = None
    encoding_names = ("cl100k_base", "p50k_base")

    @classmethod
    def get_encoding(cls):
        if cls._encoding is None:
            last_error = None
            for name in cls.encoding_names:
                try:
                    cls._encoding = tiktoken.get_encoding(name)
                    break
                except Exception as e:
                    last_error = e
            else:
                raise RuntimeError(f"No tiktoken encoding available: {last_error}")
        return cls._encoding

    @staticmethod
    def count(text: str) -> int:
        try:
            encoding = Tokenizer.get_encoding()
            return len(encoding.encode(text, disallowed_special=()))
        except Exception:
            # Encodings are fetched on first use; offline runs get a rough estimate
            return len(text) // 4
