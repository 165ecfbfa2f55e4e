"""
String Helper Functions
Laravel-style string manipulation utilities
"""
import re


class Str:
    """
    String manipulation helper class (Laravel-style)

    Provides static methods for the string operations used to derive
    model and seeder names from cache keys:
    - singular / plural inflection
    - snake_case conversion
    - StudlyCase conversion
    """

    UNCOUNTABLE = {
        'audio', 'data', 'equipment', 'feedback', 'information', 'metadata',
        'news', 'series', 'species', 'media',
    }

    IRREGULAR = {
        'child': 'children',
        'man': 'men',
        'woman': 'women',
        'person': 'people',
        'mouse': 'mice',
        'goose': 'geese',
        'tooth': 'teeth',
        'foot': 'feet',
        'ox': 'oxen',
    }

    # (pattern, replacement) applied in order, first match wins
    SINGULAR_RULES = [
        (r'(quiz)zes$', r'\1'),
        (r'(matr)ices$', r'\1ix'),
        (r'(vert|ind)ices$', r'\1ex'),
        (r'^(ox)en$', r'\1'),
        (r'(alias|status|bus)es$', r'\1'),
        (r'(octop|vir)i$', r'\1us'),
        (r'(cris|ax|test)es$', r'\1is'),
        (r'(shoe)s$', r'\1'),
        (r'(o)es$', r'\1'),
        (r'([m|l])ice$', r'\1ouse'),
        (r'(x|ch|ss|sh)es$', r'\1'),
        (r'(m)ovies$', r'\1ovie'),
        (r'([^aeiouy]|qu)ies$', r'\1y'),
        (r'([lr])ves$', r'\1f'),
        (r'(tive)s$', r'\1'),
        (r'(hive)s$', r'\1'),
        (r'([^f])ves$', r'\1fe'),
        (r'(^analy)ses$', r'\1sis'),
        (r'([ti])a$', r'\1um'),
        (r'(n)ews$', r'\1ews'),
        (r'(ss|us|is)$', r'\1'),
        (r's$', ''),
    ]

    PLURAL_RULES = [
        (r'(quiz)$', r'\1zes'),
        (r'(matr|vert|ind)(ix|ex)$', r'\1ices'),
        (r'(x|ch|ss|sh)$', r'\1es'),
        (r'([^aeiouy]|qu)y$', r'\1ies'),
        (r'(hive)$', r'\1s'),
        (r'(?:([^f])fe|([lr])f)$', r'\1\2ves'),
        (r'sis$', 'ses'),
        (r'([ti])um$', r'\1a'),
        (r'(buffal|tomat)o$', r'\1oes'),
        (r'(bu|statu|alia)s$', r'\1ses'),
        (r'(octop|vir)us$', r'\1i'),
        (r'$', 's'),
    ]

    @staticmethod
    def snake(value: str, delimiter: str = '_') -> str:
        """
        Convert a string to snake_case

        Example:
            Str.snake('TestModel')  # 'test_model'
            Str.snake('Test Model')  # 'test_model'
        """
        if not value:
            return value

        value = value.replace(' ', delimiter)

        # Insert delimiter before uppercase letters
        value = re.sub('(.)([A-Z][a-z]+)', r'\1' + delimiter + r'\2', value)
        value = re.sub('([a-z0-9])([A-Z])', r'\1' + delimiter + r'\2', value)

        value = value.lower()
        value = re.sub(f'{re.escape(delimiter)}+', delimiter, value)

        return value.strip(delimiter)

    @staticmethod
    def studly(value: str) -> str:
        """
        Convert a string to StudlyCase (PascalCase)

        Example:
            Str.studly('test_model')  # 'TestModel'
            Str.studly('blog-post')  # 'BlogPost'
        """
        if not value:
            return value

        value = value.replace('_', ' ').replace('-', ' ')

        return ''.join(word[0].upper() + word[1:] for word in value.split())

    @classmethod
    def singular(cls, value: str) -> str:
        """
        Get the singular form of an English word

        Only the last segment of a snake/kebab cased value is inflected.

        Example:
            Str.singular('faqs')  # 'faq'
            Str.singular('test_models')  # 'test_model'
            Str.singular('categories')  # 'category'
        """
        if not value:
            return value

        head, word = cls._split_last_segment(value)
        lower = word.lower()

        if lower in cls.UNCOUNTABLE:
            return value

        for singular, plural in cls.IRREGULAR.items():
            if lower == plural:
                return head + cls._match_case(singular, word)

        for pattern, replacement in cls.SINGULAR_RULES:
            if re.search(pattern, word, re.IGNORECASE):
                return head + re.sub(pattern, replacement, word, flags=re.IGNORECASE)

        return value

    @classmethod
    def plural(cls, value: str) -> str:
        """
        Get the plural form of an English word

        Example:
            Str.plural('faq')  # 'faqs'
            Str.plural('category')  # 'categories'
        """
        if not value:
            return value

        head, word = cls._split_last_segment(value)
        lower = word.lower()

        if lower in cls.UNCOUNTABLE:
            return value

        if lower in cls.IRREGULAR:
            return head + cls._match_case(cls.IRREGULAR[lower], word)

        for pattern, replacement in cls.PLURAL_RULES:
            if re.search(pattern, word, re.IGNORECASE):
                return head + re.sub(pattern, replacement, word, count=1, flags=re.IGNORECASE)

        return value

    @staticmethod
    def _split_last_segment(value: str):
        match = re.match(r'^(.*[_\-\s])?([^_\-\s]+)$', value)
        if not match:
            return '', value
        return match.group(1) or '', match.group(2)

    @staticmethod
    def _match_case(value: str, reference: str) -> str:
        if reference.isupper():
            return value.upper()
        if reference[:1].isupper():
            return value[0].upper() + value[1:]
        return value
