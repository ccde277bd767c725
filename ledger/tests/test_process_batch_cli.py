"""Tests for the process-transactions command."""

import pytest

from cli.process_batch import build_parser, main

USERS_CSV = (
    "user_id,username,balance,country,frozen,deposit_min,deposit_max,withdraw_min,withdraw_max\n"
    "1,john,100,EE,0,1,1000,1,500\n"
    "2,jane,50,FI,0,1,1000,1,500\n"
)

TRANSACTIONS_CSV = (
    "transaction_id,user_id,type,amount,method,account_number\n"
    "t1,1,DEPOSIT,25.5,TRANSFER,EE382200221020145685\n"
    "t2,1,WITHDRAW,10,TRANSFER,EE382200221020145685\n"
    "t3,2,DEPOSIT,20,CARD,4000000000123456\n"
    "t4,2,DEPOSIT,20,CARD,5100000000123456\n"
    "t1,2,DEPOSIT,20,CARD,4000000000123456\n"
)

BINS_CSV = (
    "name,range_from,range_to,type,country\n"
    "Nordic Bank,4000000000,4999999999,DC,FIN\n"
    "Credit Union,5000000000,5999999999,CC,FIN\n"
)


@pytest.fixture
def inputs(tmp_path):
    paths = {}
    for name, content in (("users", USERS_CSV), ("transactions", TRANSACTIONS_CSV), ("bins", BINS_CSV)):
        paths[name] = tmp_path / f"{name}.csv"
        paths[name].write_text(content, encoding="utf-8")
    paths["balances"] = tmp_path / "balances.csv"
    paths["events"] = tmp_path / "events.csv"
    return paths


def argv(paths):
    return [str(paths[k]) for k in ("users", "transactions", "bins", "balances", "events")]


class TestProcessBatchCli:

    def test_parser_requires_five_paths(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["users.csv"])

    def test_writes_balances_and_events(self, inputs):
        exit_code = main(argv(inputs))

        assert exit_code == 0
        assert inputs["balances"].read_text(encoding="utf-8") == "USER_ID,BALANCE\n1,115.50\n2,70.00\n"
        assert inputs["events"].read_text(encoding="utf-8") == (
            "transaction_id,status,message\n"
            "t1,APPROVED,OK\n"
            "t2,APPROVED,OK\n"
            "t3,APPROVED,OK\n"
            "t4,DECLINED,Not a debit card\n"
            "t1,DECLINED,Non-unique transaction ID\n"
        )

    def test_log_level_override(self, inputs):
        assert main(argv(inputs) + ["--log-level", "DEBUG"]) == 0

    def test_missing_input_aborts_without_output(self, inputs):
        inputs["users"].unlink()

        exit_code = main(argv(inputs))

        assert exit_code == 1
        assert not inputs["balances"].exists()
        assert not inputs["events"].exists()

    def test_malformed_line_aborts_without_output(self, inputs):
        inputs["transactions"].write_text(TRANSACTIONS_CSV + "t9,1,DEPOSIT\n", encoding="utf-8")

        assert main(argv(inputs)) == 1
        assert not inputs["events"].exists()

    def test_unwritable_events_leaves_no_balances(self, inputs, tmp_path):
        inputs["events"].mkdir()

        exit_code = main(argv(inputs))

        assert exit_code == 1
        assert not inputs["balances"].exists()
        assert not (tmp_path / "balances.csv.tmp").exists()
        assert not (tmp_path / "events.csv.tmp").exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
