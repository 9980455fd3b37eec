from issue_state.cli import main

main()
