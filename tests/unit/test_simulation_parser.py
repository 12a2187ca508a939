import unittest
from src.calculators.well_engine.models import SimulationSample
from src.calculators.well_engine.simulation_parser import parse_simulation_csv


class SimulationParserTests(unittest.TestCase):

    def test_header_and_null_readings(self):
        text = "MD,RIH,POOH\n0,100,200\n10,110,n/a\n"
        samples = parse_simulation_csv(text)

        self.assertEqual(samples, [
            SimulationSample(md=0.0, rih=100.0, pooh=200.0),
            SimulationSample(md=10.0, rih=110.0, pooh=None)
        ])

    def test_multi_line_header_detected(self):
        text = "Simulation export\nMD;RIH;POOH\n(m);(kg);(kg)\n5;1;2\n15;3;4"
        samples = parse_simulation_csv(text)
        self.assertEqual([s.md for s in samples], [5.0, 15.0])

    def test_no_header_when_first_line_is_data(self):
        samples = parse_simulation_csv("20\t1\t1\n10\t2\t2")
        self.assertEqual([s.md for s in samples], [10.0, 20.0])

    def test_data_beyond_header_scan_still_read(self):
        text = "\n".join(["md rih pooh"] + ["header"] * 11)
        samples = parse_simulation_csv(text + "\n100,1,2")
        self.assertEqual(samples, [SimulationSample(md=100.0, rih=1.0, pooh=2.0)])

    def test_unreadable_md_dropped(self):
        samples = parse_simulation_csv("MD,RIH,POOH\nabc,1,2\n30,1,2")
        self.assertEqual(len(samples), 1)
        self.assertEqual(samples[0].md, 30.0)

    def test_missing_columns_are_none(self):
        samples = parse_simulation_csv("10")
        self.assertEqual(samples, [SimulationSample(md=10.0, rih=None, pooh=None)])

    def test_stable_sort_on_duplicate_depths(self):
        samples = parse_simulation_csv("10,1,1\n5,9,9\n10,2,2")
        self.assertEqual([(s.md, s.rih) for s in samples], [(5.0, 9.0), (10.0, 1.0), (10.0, 2.0)])

    def test_mixed_separators(self):
        samples = parse_simulation_csv("0\t,\t100;;200")
        self.assertEqual(samples[0], SimulationSample(md=0.0, rih=100.0, pooh=200.0))

    def test_empty(self):
        self.assertEqual(parse_simulation_csv(""), [])


if __name__ == '__main__':
    unittest.main()
