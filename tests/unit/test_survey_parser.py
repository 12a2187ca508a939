import unittest
from src.calculators.well_engine.models import SurveyParserConfig, SurveyStation
from src.calculators.well_engine.survey_parser import (
    parse_survey_data, detect_survey_layout, format_survey_text, clean_float
)


class SurveyParserTests(unittest.TestCase):

    def test_thousand_separator_dot(self):
        config = SurveyParserConfig(delimiter='tab', thousand_sep='.')
        stations = parse_survey_data("1.234,56\t10\t20", config)

        self.assertEqual(len(stations), 1)
        self.assertAlmostEqual(stations[0].md, 1234.56)
        self.assertEqual(stations[0].inc, 10.0)
        self.assertEqual(stations[0].azi, 20.0)

    def test_thousand_separator_comma_keeps_dot_decimal(self):
        config = SurveyParserConfig(delimiter='tab', thousand_sep=',')
        stations = parse_survey_data("1,234.5\t3\t4", config)
        self.assertAlmostEqual(stations[0].md, 1234.5)

    def test_thousand_separator_space(self):
        config = SurveyParserConfig(delimiter='tab', thousand_sep='space')
        stations = parse_survey_data("1 234,5\t3\t4", config)
        self.assertAlmostEqual(stations[0].md, 1234.5)

    def test_header_skipped_with_start_line(self):
        text = "MD Inc Azi\n0 0 0\n100 1.5 45\n"
        stations = parse_survey_data(text, SurveyParserConfig(start_line=2))

        self.assertEqual(stations, [
            SurveyStation(md=0.0, inc=0.0, azi=0.0),
            SurveyStation(md=100.0, inc=1.5, azi=45.0)
        ])

    def test_auto_delimiter_mixed_separators(self):
        stations = parse_survey_data("100;\t2.5 , 30", SurveyParserConfig())
        self.assertEqual(stations[0], SurveyStation(md=100.0, inc=2.5, azi=30.0))

    def test_feet_multiplier(self):
        config = SurveyParserConfig(unit_multiplier=0.3048)
        stations = parse_survey_data("1000\t0\t0", config)
        self.assertAlmostEqual(stations[0].md, 304.8)

    def test_md_rounded_to_two_decimals(self):
        stations = parse_survey_data("100.12345 1 1", SurveyParserConfig())
        self.assertEqual(stations[0].md, 100.12)

    def test_missing_inc_row_skipped_and_missing_azi_defaults(self):
        stations = parse_survey_data("100\n200\t5", SurveyParserConfig(delimiter='tab'))

        self.assertEqual(len(stations), 1)
        self.assertEqual(stations[0], SurveyStation(md=200.0, inc=5.0, azi=0.0))

    def test_negative_md_rejected(self):
        stations = parse_survey_data("-5\t1\t1\n10\t1\t1", SurveyParserConfig())
        self.assertEqual([s.md for s in stations], [10.0])

    def test_quoted_cells_with_decimal_comma(self):
        config = SurveyParserConfig(delimiter=';')
        stations = parse_survey_data('"100";"2,5";"30"', config)
        self.assertEqual(stations[0], SurveyStation(md=100.0, inc=2.5, azi=30.0))

    def test_unparseable_tokens_read_as_zero(self):
        stations = parse_survey_data("abc\t5\txyz", SurveyParserConfig(delimiter='tab'))
        self.assertEqual(stations[0], SurveyStation(md=0.0, inc=5.0, azi=0.0))

    def test_blank_lines_and_crlf(self):
        text = "0\t0\t0\r\n\r\n100\t1\t2\r\n"
        stations = parse_survey_data(text, SurveyParserConfig(delimiter='tab'))
        self.assertEqual([s.md for s in stations], [0.0, 100.0])

    def test_column_mapping(self):
        config = SurveyParserConfig(col_md=2, col_inc=3, col_azi=1)
        stations = parse_survey_data("45 100 3", config)
        self.assertEqual(stations[0], SurveyStation(md=100.0, inc=3.0, azi=45.0))

    def test_empty_text(self):
        self.assertEqual(parse_survey_data("", SurveyParserConfig()), [])
        self.assertEqual(parse_survey_data(None, SurveyParserConfig()), [])

    def test_clean_float_leading_number(self):
        self.assertEqual(clean_float("12.5m", 'none'), 12.5)
        self.assertEqual(clean_float("", 'none'), 0.0)


class SurveyParserConfigTests(unittest.TestCase):

    def test_start_line_clamped(self):
        self.assertEqual(SurveyParserConfig(start_line=0).start_line, 1)

    def test_invalid_thousand_separator(self):
        with self.assertRaises(ValueError):
            SurveyParserConfig(thousand_sep='x')

    def test_invalid_column(self):
        with self.assertRaises(ValueError):
            SurveyParserConfig(col_md=0)

    def test_from_dict_defaults(self):
        config = SurveyParserConfig.from_dict({'startLine': 2, 'thousandSep': '.'})
        self.assertEqual(config.start_line, 2)
        self.assertEqual(config.delimiter, 'auto')
        self.assertEqual(config.col_azi, 3)
        self.assertEqual(config.unit_multiplier, 1.0)


class SurveyLayoutTests(unittest.TestCase):

    def test_detects_first_data_line(self):
        text = "MD Inc Azi\n(m) (deg) (deg)\n0 0 0\n100 1 2"
        self.assertEqual(detect_survey_layout(text), {'start_line': 3, 'delimiter': 'auto'})

    def test_detects_comma_delimiter(self):
        text = "MD,Inc,Azi\n10, 1, 2\n20, 1, 2"
        self.assertEqual(detect_survey_layout(text), {'start_line': 2, 'delimiter': ','})

    def test_no_data_line(self):
        self.assertEqual(detect_survey_layout("just text"), {'start_line': 1, 'delimiter': 'auto'})

    def test_formatted_text_reads_back(self):
        stations = [SurveyStation(0.0, 0.0, 0.0), SurveyStation(150.5, 12.25, 270.0)]
        text = format_survey_text(stations)

        self.assertTrue(text.startswith("MD\tInc\tAzi\n"))
        parsed = parse_survey_data(text, SurveyParserConfig(start_line=2, delimiter='tab'))
        self.assertEqual(parsed, stations)


if __name__ == '__main__':
    unittest.main()
