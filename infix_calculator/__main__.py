from infix_calculator.repl import main

main()
