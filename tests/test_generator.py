import re

import pytest

from structid import GenerateOptions, generate_id, luhn_validate, mod36_check_char, validate_id
from structid.errors import IncompatibleAlgorithmError, InvalidOptionsError, PatternError


class TestFixedLength:
    """Tests for generation without a pattern."""

    def test_default_is_16_digits(self, seeded):
        ident = generate_id(rng=seeded(12))
        assert re.fullmatch(r"\d{16}", ident)

    def test_unseeded_default(self):
        assert re.fullmatch(r"\d{16}", generate_id())

    def test_total_length_without_separator(self, seeded):
        assert re.fullmatch(r"\d{12}", generate_id(total_length=12, rng=seeded(4)))

    def test_groups_define_length(self, seeded):
        assert re.fullmatch(r"\d{15}", generate_id(groups=5, group_size=3, rng=seeded(123)))

    def test_numeric_has_no_leading_zero(self, scripted):
        assert generate_id(total_length=4, rng=scripted(default=0.0)) == "1000"
        assert generate_id(total_length=4, rng=scripted(default=0.9999999)) == "9999"

    def test_alphanumeric_allows_leading_zero(self, scripted):
        ident = generate_id(total_length=4, charset="alphanumeric", rng=scripted(default=0.0))
        assert ident == "0000"

    def test_luhn_appends_check_digit(self, scripted):
        assert generate_id(total_length=4, algorithm="luhn", rng=scripted(default=0.0)) == "1008"

    def test_luhn_output_validates(self, seeded):
        ident = generate_id(algorithm="luhn", rng=seeded(9))
        assert re.fullmatch(r"\d{16}", ident)
        assert luhn_validate(ident)

    def test_mod36_appends_check_char(self, seeded):
        ident = generate_id(charset="alphanumeric", algorithm="mod36", rng=seeded(9))
        assert re.fullmatch(r"[0-9A-Z]{16}", ident)
        assert ident[-1] == mod36_check_char(ident[:-1])

    def test_one_draw_per_body_character(self, scripted):
        rng = scripted(default=0.3)
        generate_id(algorithm="luhn", rng=rng)
        assert rng.calls == 15

        rng = scripted(default=0.3)
        generate_id(total_length=10, charset="alphanumeric", rng=rng)
        assert rng.calls == 10

    def test_minimum_length(self, seeded):
        assert len(generate_id(total_length=2, algorithm="luhn", rng=seeded(1))) == 2
        with pytest.raises(InvalidOptionsError, match="length must be at least 2"):
            generate_id(total_length=1)
        with pytest.raises(InvalidOptionsError, match="length must be at least 2"):
            generate_id(groups=1, group_size=1)


class TestSeparator:
    """Tests for grouped output."""

    def test_default_groups(self, seeded):
        assert re.fullmatch(r"\d{4} \d{4} \d{4} \d{4}", generate_id(rng=seeded(5), separator=" "))

    def test_explicit_groups(self, seeded):
        ident = generate_id(groups=5, group_size=3, rng=seeded(6), separator="-")
        assert re.fullmatch(r"\d{3}-\d{3}-\d{3}-\d{3}-\d{3}", ident)

    def test_conflicting_total_length(self, seeded):
        with pytest.raises(InvalidOptionsError, match="conflict"):
            generate_id(total_length=12, separator="-", rng=seeded(1))
        with pytest.raises(InvalidOptionsError, match="conflict"):
            generate_id(total_length=10, groups=5, group_size=3, separator="-", rng=seeded(2))

    def test_matching_total_length(self, seeded):
        ident = generate_id(total_length=12, groups=3, group_size=4, separator="-", rng=seeded(3))
        assert re.fullmatch(r"\d{4}-\d{4}-\d{4}", ident)

    def test_grouped_luhn_still_validates(self, seeded):
        ident = generate_id(algorithm="luhn", separator=" ", rng=seeded(8))
        assert luhn_validate(ident.replace(" ", ""))


class TestCompatibility:
    """Tests for algorithm/charset pairing."""

    def test_fixed_mode(self):
        with pytest.raises(IncompatibleAlgorithmError, match='requires charset "numeric"'):
            generate_id(charset="alphanumeric", algorithm="luhn")
        with pytest.raises(IncompatibleAlgorithmError, match='requires charset "alphanumeric"'):
            generate_id(charset="numeric", algorithm="mod36")

    def test_pattern_mode(self):
        with pytest.raises(IncompatibleAlgorithmError):
            generate_id(pattern="##-##", charset="alphanumeric", algorithm="luhn")


class TestPattern:
    """Tests for pattern-shaped generation."""

    def test_numeric_without_checksum(self, seeded):
        assert re.fullmatch(r"\d{3}-\d-\d{3}", generate_id(pattern="###-#-###", rng=seeded(11)))

    def test_literals_preserved(self, seeded):
        for seed in range(20):
            ident = generate_id(
                pattern="PROMO-###-###", charset="alphanumeric", algorithm="mod36", rng=seeded(seed)
            )
            assert re.fullmatch(r"PROMO-[0-9A-Z]{3}-[0-9A-Z]{3}", ident)

    def test_trimmed(self, seeded):
        assert re.fullmatch(r"\d{2}-\d{2}", generate_id(pattern="  ##-##  ", rng=seeded(14)))

    def test_regex_metacharacters_are_literal(self, seeded):
        ident = generate_id(pattern="ID(###)+[X]", charset="alphanumeric", rng=seeded(23))
        assert re.fullmatch(r"ID\([0-9A-Z]{3}\)\+\[X\]", ident)

    def test_grouping_ignored(self, seeded):
        ident = generate_id(
            pattern="AA-##-##", charset="alphanumeric", separator=".", groups=10, group_size=10, rng=seeded(16)
        )
        assert re.fullmatch(r"AA-[0-9A-Z]{2}-[0-9A-Z]{2}", ident)

    def test_blank_pattern_falls_back_to_fixed(self, seeded):
        assert re.fullmatch(r"\d{16}", generate_id(pattern="   ", rng=seeded(2)))

    def test_checksum_requires_slot(self, seeded):
        with pytest.raises(PatternError, match="at least one '#'"):
            generate_id(pattern="PROMO", charset="alphanumeric", algorithm="mod36", rng=seeded(21))

    def test_pattern_without_slot_and_no_checksum(self):
        assert generate_id(pattern="PROMO") == "PROMO"

    def test_slot_fill_order(self, scripted):
        rng = scripted([0.5, 0.25])
        assert generate_id(pattern="X##", charset="alphanumeric", rng=rng) == "XI9"
        assert rng.calls == 2

    def test_checksum_slot_consumes_no_draw(self, scripted):
        rng = scripted(default=0.1)
        generate_id(pattern="PROMO-###-###", charset="alphanumeric", algorithm="mod36", rng=rng)
        assert rng.calls == 5

        rng = scripted(default=0.1)
        generate_id(pattern="PROMO-###-###", charset="alphanumeric", rng=rng)
        assert rng.calls == 6

    def test_checksum_spliced_into_last_slot(self, scripted):
        # Both body slots draw "0", so the mod36 check "0" goes into the last '#'.
        ident = generate_id(pattern="A##-#B", charset="alphanumeric", algorithm="mod36", rng=scripted())
        assert ident == "A00-0B"

    def test_luhn_ignores_letter_literals(self, seeded):
        ident = generate_id(pattern="A###-B#-##C#", algorithm="luhn", rng=seeded(31))
        assert re.fullmatch(r"A\d{3}-B\d-\d{2}C\d", ident)
        digits = "".join(ch for ch in ident if ch.isdigit())
        assert luhn_validate(digits)

    def test_single_slot_holds_checksum_of_empty_body(self):
        assert generate_id(pattern="#", algorithm="luhn") == "0"
        assert generate_id(pattern="X-#", charset="alphanumeric", algorithm="mod36") == "X-0"


class TestDeterminismAndOptions:
    """Tests for reproducibility and option handling."""

    @pytest.mark.parametrize("kwargs", [
        {},
        {"algorithm": "luhn", "separator": "-"},
        {"charset": "alphanumeric", "algorithm": "mod36"},
        {"pattern": "PROMO-###-###", "charset": "alphanumeric", "algorithm": "mod36"},
    ])
    def test_same_seed_same_output(self, seeded, kwargs):
        assert generate_id(rng=seeded(77), **kwargs) == generate_id(rng=seeded(77), **kwargs)

    def test_accepts_options_model(self, seeded):
        opts = GenerateOptions(total_length=8, algorithm="luhn", rng=seeded(3))
        ident = generate_id(opts)
        assert len(ident) == 8
        assert validate_id(ident, opts)

    def test_overrides_apply_on_top_of_model(self, seeded):
        opts = GenerateOptions(total_length=8)
        assert len(generate_id(opts, total_length=10, rng=seeded(3))) == 10

    def test_accepts_mapping(self, seeded):
        ident = generate_id({"charset": "alphanumeric", "total_length": 6, "rng": seeded(1)})
        assert re.fullmatch(r"[0-9A-Z]{6}", ident)

    def test_use_crypto(self):
        ident = generate_id(use_crypto=True, algorithm="luhn")
        assert re.fullmatch(r"\d{16}", ident)
        assert luhn_validate(ident)
