import lox



if __name__ == "__main__":
    lox.main()
